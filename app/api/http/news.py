from app.api.http.content import content_router
from app.domains.content.schemas import NewsCreate, NewsResponse, NewsUpdate
from app.domains.content.services import NewsService

router = content_router(
    prefix="/news",
    slug_path="n",
    service_class=NewsService,
    create_schema=NewsCreate,
    update_schema=NewsUpdate,
    response_schema=NewsResponse,
    tag="news"
)
