from datetime import timedelta
from enum import Enum
from typing import TypeAlias

# Types allowed as query parameter values
QueryTypes: TypeAlias = bool | str | int | timedelta | None


class Method(str, Enum):
    """API methods with their own parameter conventions."""

    ARTICLE = "article"
    IMAGE = "image"
    PRODUCT = "product"
    FRONTPAGE = "frontpage"
    ANALYZE = "analyze"
    BULK = "bulk"
    CRAWL = "crawl"
    CRAWL_DATA = "crawl/data"
    BATCH = "batch"
