# backend/routers/products_router.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from database.session import get_db
from routers.dependencies import get_session_user
from schemas.auth import MessageResponse, SessionUser
from schemas.products import ProductOut, ProductPage, ProductUpdate
from services import catalog_service
from services.cloudinary_service import get_image_storage

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=ProductPage)
def list_products(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    # public
    return catalog_service.list_products(db, page, limit, search)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return catalog_service.to_out(catalog_service.get_product(db, product_id))


@router.post("/", response_model=ProductOut, status_code=201)
async def add_product(
    name: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    stock: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    size: Optional[str] = Form(None),
    color: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user: Optional[SessionUser] = Depends(get_session_user),
    storage=Depends(get_image_storage),
    db: Session = Depends(get_db),
):
    """
    Create a product from a multipart form; ``image`` is optional and is
    uploaded to Cloudinary before the product is saved.
    """
    attached = None
    if image is not None and image.filename:
        attached = {"content": await image.read(), "filename": image.filename}

    p = await catalog_service.add_product(
        db, user,
        name=name, price=price, stock=stock,
        description=description, size=size, color=color,
        image=attached, storage=storage,
    )
    return catalog_service.to_out(p)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    body: ProductUpdate,
    user: Optional[SessionUser] = Depends(get_session_user),
    db: Session = Depends(get_db),
):
    return catalog_service.to_out(catalog_service.update_product(db, user, product_id, body))


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: int,
    user: Optional[SessionUser] = Depends(get_session_user),
    storage=Depends(get_image_storage),
    db: Session = Depends(get_db),
):
    await catalog_service.delete_product(db, user, product_id, storage=storage)
    return MessageResponse(message="Product deleted successfully")
