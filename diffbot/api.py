import logging

import httpx
from fast_depends import inject

from diffbot.entity import Options, Request, method_param_string
from diffbot.settings import ApiSettings


class Diffbot:
    @inject
    def __init__(self, settings: ApiSettings) -> None:
        self.settings = settings
        self.options = settings.options
        self.logger = logging.getLogger("diffbot")

    def params(self, method: str, options: Options | dict | None = None) -> str:
        """Encode `options` (or default ones) as `method` query suffix."""
        if options is None:
            options = self.options
        options = Options.model_validate(options)

        params = method_param_string(options, method)
        self.logger.debug("Encoded %s parameters: %r", method, params)

        return params

    def url(self, request: Request | dict) -> str:
        """Build absolute request url (default options are used for request without own ones)."""
        request = self._with_defaults(request)

        url = f"{self.settings.api_url}{request.query}"
        self.logger.debug("Built request url: %s", url)

        return url

    def headers(self, request: Request | dict) -> httpx.Headers:
        """Custom headers of request (default options are used for request without own ones)."""
        return self._with_defaults(request).headers

    def _with_defaults(self, request: Request | dict) -> Request:
        request = Request.model_validate(request)
        if request.options is None:
            request = request.model_copy(update={"options": self.options})
        return request
