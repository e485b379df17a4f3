"""Product API router: listing, image fetch, create, edit and delete."""

from typing import Any

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from src.catalog.api.http.deps import (
    get_catalog_query_service,
    get_image_normalizer,
    get_product_mutation_service,
)
from src.catalog.api.http.forms import build_input, parse_variants, read_upload
from src.catalog.core.errors import InvalidInputError
from src.catalog.core.models import (
    Pagination,
    ProductCreateInput,
    ProductEditInput,
    ProductFilter,
    ProductSort,
    SortDirection,
    SortField,
)
from src.catalog.core.services import (
    CatalogQueryService,
    ImageNormalizerService,
    ProductMutationService,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
def list_products(
    name: str | None = None,
    category_id: str | None = None,
    sort_by: str | None = None,
    order_by: str | None = None,
    is_paginated: bool = True,
    page: int = 1,
    per_page: int | None = None,
    service: CatalogQueryService = Depends(get_catalog_query_service),
) -> dict[str, Any]:
    """List products, optionally filtered by name and scoped to one category."""
    default_sort = service.default_sort()
    sort = ProductSort(
        field=SortField.parse(sort_by) if sort_by else default_sort.field,
        direction=SortDirection.parse(order_by) if order_by else default_sort.direction,
    )
    pagination = build_input(
        Pagination,
        {
            "page": page,
            "per_page": (
                per_page if per_page is not None else service.default_pagination().per_page
            ),
            "enabled": is_paginated,
        },
    )
    result = service.list_products(ProductFilter(name=name), sort, pagination, category_id)
    return result.to_response()


@router.get("/{product_id}/image")
def get_product_image(
    product_id: str,
    service: CatalogQueryService = Depends(get_catalog_query_service),
    image_normalizer: ImageNormalizerService = Depends(get_image_normalizer),
) -> Response:
    return Response(
        content=service.get_product_image(product_id),
        media_type=image_normalizer.media_type,
    )


@router.post("", status_code=201)
def create_product(
    name: str | None = Form(None),
    description: str | None = Form(None),
    is_active: bool = Form(True),
    category_id: list[str] | None = Form(None),
    variants: str | None = Form(None),
    image: UploadFile | None = File(None),
    service: ProductMutationService = Depends(get_product_mutation_service),
) -> dict[str, Any]:
    """Create a product together with its categories and variants."""
    data = build_input(
        ProductCreateInput,
        {
            "name": name,
            "description": description,
            "is_active": is_active,
            "category_ids": category_id,
            "variants": parse_variants(variants),
            "image": read_upload(image),
        },
    )
    product = service.create_product(data)
    return {"data": product.model_dump(mode="json")}


@router.patch("/{product_id}")
def edit_product(
    product_id: str,
    name: str | None = Form(None),
    description: str | None = Form(None),
    is_active: bool | None = Form(None),
    clear_description: bool = Form(False),
    category_id: list[str] | None = Form(None),
    variants: str | None = Form(None),
    image: UploadFile | None = File(None),
    service: ProductMutationService = Depends(get_product_mutation_service),
) -> dict[str, Any]:
    """Partially update a product; only the supplied fields change.

    Empty form values count as not supplied, so removing the description
    takes ``clear_description=true`` instead.
    """
    if clear_description and description is not None:
        raise InvalidInputError("description and clear_description are mutually exclusive")
    supplied = {
        "name": name,
        "description": description,
        "is_active": is_active,
        "category_ids": category_id,
        "variants": parse_variants(variants),
        "image": read_upload(image),
    }
    values = {field: value for field, value in supplied.items() if value is not None}
    if clear_description:
        values["description"] = None
    data = build_input(ProductEditInput, values)
    product = service.edit_product(product_id, data)
    return {"data": product.model_dump(mode="json")}


@router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: str,
    service: ProductMutationService = Depends(get_product_mutation_service),
) -> Response:
    service.delete_product(product_id)
    return Response(status_code=204)
