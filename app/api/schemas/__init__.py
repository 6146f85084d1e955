from app.api.schemas.common import CamelModel, MessageResponse, UploadResponse
from app.api.schemas.user import (
    LoginResponse,
    RoleUpdate,
    RoleUpdateResponse,
    UserEnvelope,
    UserListEnvelope,
    UserResponse,
)
from app.api.schemas.topic import (
    TopicCreate,
    TopicEnvelope,
    TopicListEnvelope,
    TopicResponse,
    TopicSummary,
    TopicUpdate,
)
from app.api.schemas.article import (
    ArticleCreate,
    ArticleDetailEnvelope,
    ArticleEnvelope,
    ArticleListEnvelope,
    ArticleResponse,
    ArticleUpdate,
    ArticleWithTopicResponse,
    OrderUpdate,
    PublicArticleDetail,
    PublicArticleEnvelope,
    PublicArticleSummary,
    StatusUpdate,
    TopicArticlesEnvelope,
)
