"""Category API router."""

from typing import Any

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from src.catalog.api.http.deps import get_category_service, get_image_normalizer
from src.catalog.api.http.forms import read_upload
from src.catalog.core.errors import InvalidInputError
from src.catalog.core.services import CategoryService, ImageNormalizerService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> dict[str, Any]:
    categories = service.list_categories()
    return {
        "data": [category.model_dump(mode="json") for category in categories],
        "total_data": len(categories),
    }


@router.post("", status_code=201)
def create_category(
    name: str | None = Form(None),
    image: UploadFile | None = File(None),
    service: CategoryService = Depends(get_category_service),
) -> dict[str, Any]:
    if not name:
        raise InvalidInputError("name is required")
    category = service.create_category(name, read_upload(image))
    return {"data": category.model_dump(mode="json")}


@router.get("/{category_id}/image")
def get_category_image(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
    image_normalizer: ImageNormalizerService = Depends(get_image_normalizer),
) -> Response:
    return Response(
        content=service.get_category_image(category_id),
        media_type=image_normalizer.media_type,
    )
