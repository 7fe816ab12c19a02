from vott_server.main import run

run()
