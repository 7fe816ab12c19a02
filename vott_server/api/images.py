"""Catalog and JPEG endpoints backed by the local asset directory."""
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, Response

from vott_server.services.images import ImageAssets
from vott_server.settings import settings

router = APIRouter()


def get_image_assets() -> ImageAssets:
    return ImageAssets(settings.asset_root, settings.catalog_path)


@router.get("/{name}")
def get_catalog(name: str, assets: ImageAssets = Depends(get_image_assets)) -> Response:
    return Response(content=assets.read_catalog(), media_type="application/json")


@router.get("/{name}/{file_name}")
def get_image(name: str, file_name: str, assets: ImageAssets = Depends(get_image_assets)) -> FileResponse:
    return FileResponse(assets.resolve_image(file_name), media_type="image/jpeg")
