import logging
from typing import Any, List, Optional

from models.schemas import LenientModel

logger = logging.getLogger(__name__)


class BlogCategory(LenientModel):
    id: Optional[int] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    order: Optional[int] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class BlogPost(LenientModel):
    id: Optional[int] = None
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    author_name: Optional[str] = None
    published_at: Optional[str] = None
    status: Optional[str] = None
    pinned: bool = False
    image: Optional[str] = None
    image_alt: Optional[str] = None
    read_time_min: Optional[int] = None
    is_active: bool = True
    category: Optional[BlogCategory] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def parse_blog_posts(payload: Any) -> List[BlogPost]:
    if not isinstance(payload, list):
        logger.warning(f"Expected a list of blog posts, got {type(payload).__name__}")
        return []
    return [BlogPost.model_validate(p) for p in payload if isinstance(p, dict)]
