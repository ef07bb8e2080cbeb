from models.blog import BlogCategory, BlogPost, parse_blog_posts
from models.domain import (
    CommerceSortKey,
    EvaluationSortKey,
    ProducerSortKey,
    ViewMode,
)
from models.profile import Bundle, BundleEvaluation, ProducerDetail
from models.schemas import (
    Address,
    Certification,
    City,
    CommerceRow,
    Company,
    DepartmentRef,
    Producer,
    RegionRef,
    parse_producers,
)

__all__ = [
    "Address",
    "BlogCategory",
    "BlogPost",
    "Bundle",
    "BundleEvaluation",
    "Certification",
    "City",
    "CommerceRow",
    "CommerceSortKey",
    "Company",
    "DepartmentRef",
    "EvaluationSortKey",
    "Producer",
    "ProducerDetail",
    "ProducerSortKey",
    "RegionRef",
    "ViewMode",
    "parse_blog_posts",
    "parse_producers",
]
