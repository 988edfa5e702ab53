from app.api.http.content import content_router
from app.domains.content.schemas import VideoCreate, VideoResponse, VideoUpdate
from app.domains.content.services import VideoService

router = content_router(
    prefix="/videos",
    slug_path="v",
    service_class=VideoService,
    create_schema=VideoCreate,
    update_schema=VideoUpdate,
    response_schema=VideoResponse,
    tag="videos"
)
