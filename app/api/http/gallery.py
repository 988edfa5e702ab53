from app.api.http.content import content_router
from app.domains.content.schemas import GalleryCreate, GalleryResponse, GalleryUpdate
from app.domains.content.services import GalleryService

router = content_router(
    prefix="/gallery",
    slug_path="g",
    service_class=GalleryService,
    create_schema=GalleryCreate,
    update_schema=GalleryUpdate,
    response_schema=GalleryResponse,
    tag="gallery"
)
