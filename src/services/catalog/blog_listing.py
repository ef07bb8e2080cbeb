from dataclasses import dataclass
from typing import List, Optional, Sequence

from models.blog import BlogPost
from services.catalog.collation import collation_key, contains
from services.catalog.dates import timestamp_or_earliest

ALL_CATEGORIES = "Tous"
_UNORDERED = 9999


def _category_name(post: BlogPost) -> str:
    if post.category is None or not post.category.name:
        return ""
    return post.category.name.strip()


def category_options(posts: Sequence[BlogPost]) -> List[str]:
    """``"Tous"`` followed by category names ordered by ``order`` then name."""
    orders: dict[str, int] = {}
    for post in posts:
        name = _category_name(post)
        if name and name not in orders:
            order = post.category.order
            orders[name] = order if isinstance(order, int) else _UNORDERED
    ranked = sorted(orders, key=lambda name: (orders[name], collation_key(name), name))
    return [ALL_CATEGORIES, *ranked]


def _published(post: BlogPost) -> float:
    return timestamp_or_earliest(post.published_at, post.created_at)


def featured_post(posts: Sequence[BlogPost]) -> Optional[BlogPost]:
    if not posts:
        return None
    for post in posts:
        if post.pinned:
            return post
    return max(posts, key=_published)


def filter_posts(posts: Sequence[BlogPost], query: str = "", category: str = ALL_CATEGORIES) -> List[BlogPost]:
    needle = (query or "").strip()
    wanted = category or ALL_CATEGORIES
    result = []
    for post in posts:
        if wanted != ALL_CATEGORIES and _category_name(post) != wanted:
            continue
        if needle and not any(contains(text, needle) for text in (post.title, post.excerpt, post.author_name)):
            continue
        result.append(post)
    return result


@dataclass(frozen=True)
class BlogViewModel:
    categories: List[str]
    featured: Optional[BlogPost]
    posts: List[BlogPost]
    total: int


def derive_blog_view(posts: Sequence[BlogPost], query: str = "", category: str = ALL_CATEGORIES) -> BlogViewModel:
    """The featured post only shows on the unfiltered listing and is never repeated in the grid.

    When a query or a category hides the banner, the featured post stays in the
    grid like any other matching post.
    """
    featured = featured_post(posts)
    filtered = filter_posts(posts, query, category)
    show_featured = featured is not None and not query and (category or ALL_CATEGORIES) == ALL_CATEGORIES
    regular = [p for p in filtered if not show_featured or p.id != featured.id]
    return BlogViewModel(
        categories=category_options(posts),
        featured=featured if show_featured else None,
        posts=regular,
        total=len(filtered),
    )
