from collections.abc import Generator
from datetime import timedelta
from typing import ClassVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

from diffbot.query import build_query
from diffbot.type import Method, QueryTypes


class Options(BaseModel):
    """Optional parameters of API requests.

    One flat record for every method: fields that do not apply to the requested method are ignored.
    See http://diffbot.com/products/automatic/
    """

    model_config = ConfigDict(frozen=True)

    fields: str = ""
    timeout: timedelta = timedelta(0)
    callback: str = ""
    frontpage_all: str = ""
    discussion: bool = False
    classifier_mode: str = ""
    classifier_stats: str = ""
    bulk_notify_email: str = ""
    bulk_notify_web_hook: str = ""
    bulk_repeat: str = ""
    bulk_max_rounds: str = ""
    bulk_page_process_pattern: str = ""
    crawl_max_to_crawl: str = ""
    crawl_max_to_process: str = ""
    crawl_restrict_domain: str = ""
    crawl_notify_email: str = ""
    crawl_notify_web_hook: str = ""
    crawl_delay: str = ""
    crawl_repeat: str = ""
    crawl_only_process_if_new: str = ""
    crawl_max_rounds: str = ""
    crawl_url_pattern: str = ""
    crawl_url_regexp: str = ""
    crawl_url_process_pattern: str = ""
    crawl_url_process_regexp: str = ""
    crawl_page_process_pattern: str = ""
    crawl_max_hops: str = ""
    crawl_format: str = ""
    crawl_type: str = ""
    crawl_number: str = ""
    batch_method: str = ""
    batch_relative_url: str = ""
    custom_header: dict[str, str] = {}

    def method_param_string(self, method: str) -> str:
        """Return `method` parameters as url query suffix.

        If any parameter is set, the returned string begins with `&`.
        """
        return method_param_string(self, method)


class Parameters(BaseModel):
    """Parameters of a single method family, declared in query order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Query names whose values are percent-encoded
    escaped: ClassVar[frozenset[str]] = frozenset()

    @classmethod
    def from_options(cls, options: Options) -> "Parameters":
        raise NotImplementedError

    def items(self) -> Generator[tuple[str, QueryTypes], None, None]:
        for name, field in type(self).model_fields.items():
            yield field.alias or name, getattr(self, name)

    @property
    def query(self) -> str:
        return build_query(self.items(), self.escaped)


def _discussion(options: Options) -> bool | None:
    # Discussion is sent only to switch it off
    return None if options.discussion else False


class ArticleParameters(Parameters):
    """Parameters of `article`, `image` and `product` requests."""

    escaped: ClassVar[frozenset[str]] = frozenset({"callback"})

    fields: str = ""
    timeout: timedelta = timedelta(0)
    callback: str = ""
    discussion: bool | None = None

    @classmethod
    def from_options(cls, options: Options) -> "ArticleParameters":
        return cls(
            fields=options.fields,
            timeout=options.timeout,
            callback=options.callback,
            discussion=_discussion(options),
        )


class FrontpageParameters(Parameters):
    """Parameters of `frontpage` requests."""

    timeout: timedelta = timedelta(0)
    all: str = ""

    @classmethod
    def from_options(cls, options: Options) -> "FrontpageParameters":
        return cls(timeout=options.timeout, all=options.frontpage_all)


class AnalyzeParameters(Parameters):
    """Parameters of `analyze` (page classifier) requests."""

    mode: str = ""
    fields: str = ""
    stats: str = ""
    discussion: bool | None = None

    @classmethod
    def from_options(cls, options: Options) -> "AnalyzeParameters":
        return cls(
            mode=options.classifier_mode,
            fields=options.fields,
            stats=options.classifier_stats,
            discussion=_discussion(options),
        )


class BulkParameters(Parameters):
    """Parameters of `bulk` job requests."""

    notify_email: str = Field("", alias="notifyEmail")
    notify_web_hook: str = Field("", alias="notifyWebHook")
    repeat: str = ""
    max_rounds: str = Field("", alias="maxRounds")
    page_process_pattern: str = Field("", alias="pageProcessPattern")

    @classmethod
    def from_options(cls, options: Options) -> "BulkParameters":
        return cls(
            notify_email=options.bulk_notify_email,
            notify_web_hook=options.bulk_notify_web_hook,
            repeat=options.bulk_repeat,
            max_rounds=options.bulk_max_rounds,
            page_process_pattern=options.bulk_page_process_pattern,
        )


class CrawlParameters(Parameters):
    """Parameters of `crawl` job requests."""

    max_to_crawl: str = Field("", alias="maxToCrawl")
    max_to_process: str = Field("", alias="maxToProcess")
    restrict_domain: str = Field("", alias="restrictDomain")
    notify_email: str = Field("", alias="notifyEmail")
    notify_web_hook: str = Field("", alias="notifyWebHook")
    crawl_delay: str = Field("", alias="crawlDelay")
    repeat: str = ""
    only_process_if_new: str = Field("", alias="onlyProcessIfNew")
    max_rounds: str = Field("", alias="maxRounds")
    url_crawl_pattern: str = Field("", alias="urlCrawlPattern")
    url_crawl_regexp: str = Field("", alias="urlCrawlRegEx")
    url_process_pattern: str = Field("", alias="urlProcessPattern")
    url_process_regexp: str = Field("", alias="urlProcessRegEx")
    page_process_pattern: str = Field("", alias="pageProcessPattern")
    max_hops: str = Field("", alias="maxHops")

    @classmethod
    def from_options(cls, options: Options) -> "CrawlParameters":
        return cls(
            max_to_crawl=options.crawl_max_to_crawl,
            max_to_process=options.crawl_max_to_process,
            restrict_domain=options.crawl_restrict_domain,
            notify_email=options.crawl_notify_email,
            notify_web_hook=options.crawl_notify_web_hook,
            crawl_delay=options.crawl_delay,
            repeat=options.crawl_repeat,
            only_process_if_new=options.crawl_only_process_if_new,
            max_rounds=options.crawl_max_rounds,
            url_crawl_pattern=options.crawl_url_pattern,
            url_crawl_regexp=options.crawl_url_regexp,
            url_process_pattern=options.crawl_url_process_pattern,
            url_process_regexp=options.crawl_url_process_regexp,
            page_process_pattern=options.crawl_page_process_pattern,
            max_hops=options.crawl_max_hops,
        )


class CrawlDataParameters(Parameters):
    """Parameters of `crawl/data` download requests."""

    format: str = ""
    type: str = ""
    num: str = ""

    @classmethod
    def from_options(cls, options: Options) -> "CrawlDataParameters":
        return cls(format=options.crawl_format, type=options.crawl_type, num=options.crawl_number)


class BatchParameters(Parameters):
    """Parameters of `batch` requests."""

    escaped: ClassVar[frozenset[str]] = frozenset({"relative_url"})

    timeout: timedelta = timedelta(0)
    method: str = ""
    relative_url: str = ""

    @classmethod
    def from_options(cls, options: Options) -> "BatchParameters":
        return cls(
            timeout=options.timeout,
            method=options.batch_method,
            relative_url=options.batch_relative_url,
        )


class CustomParameters(Parameters):
    """Parameters of custom API requests."""

    escaped: ClassVar[frozenset[str]] = frozenset({"callback"})

    timeout: timedelta = timedelta(0)
    callback: str = ""

    @classmethod
    def from_options(cls, options: Options) -> "CustomParameters":
        return cls(timeout=options.timeout, callback=options.callback)


def method_parameters(options: Options, method: str) -> Parameters:
    """Project `options` onto the parameters of `method`."""
    match method:
        case Method.ARTICLE | Method.IMAGE | Method.PRODUCT:
            parameters = ArticleParameters
        case Method.FRONTPAGE:
            parameters = FrontpageParameters
        case Method.ANALYZE:
            parameters = AnalyzeParameters
        case Method.BULK:
            parameters = BulkParameters
        case Method.CRAWL:
            parameters = CrawlParameters
        case Method.CRAWL_DATA:
            parameters = CrawlDataParameters
        case Method.BATCH:
            parameters = BatchParameters
        case _:
            parameters = CustomParameters

    return parameters.from_options(options)


def method_param_string(options: Options | None, method: str) -> str:
    """Return `method` parameters from `options` as url query suffix.

    Empty for missing `options` or `method`, otherwise a (possibly empty) sequence of `&name=value` pairs.
    Unknown methods are treated as custom APIs.
    """
    if options is None or not method:
        return ""

    return method_parameters(options, method).query


class Request(BaseModel):
    """API request."""

    method: str
    url: str | None = None
    options: Options | None = None

    @property
    def query(self) -> str:
        query = build_query([("url", self.url)], {"url"})
        query += method_param_string(self.options, self.method)
        if not query:
            return self.method

        return f"{self.method}?{query[1:]}"

    @property
    def headers(self) -> httpx.Headers:
        if self.options is None:
            return httpx.Headers()
        return httpx.Headers(self.options.custom_header)
