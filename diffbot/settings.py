from collections.abc import Generator
from datetime import timedelta
from typing import Annotated

from fast_depends import Depends
from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from diffbot.entity import Options


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="diffbot_",
        env_file=".env",
        extra="ignore",
    )

    api_url: HttpUrl = Field("https://api.diffbot.com/v3/", validate_default=True)

    # Defaults for requests without own options
    fields: str = ""
    timeout: timedelta = timedelta(0)
    callback: str = ""
    discussion: bool = False

    @property
    def options(self) -> Options:
        return Options(
            fields=self.fields,
            timeout=self.timeout,
            callback=self.callback,
            discussion=self.discussion,
        )


def api_settings(**kwargs: dict) -> Generator[Settings, None, None]:
    settings = Settings(**kwargs)
    yield settings


ApiSettings = Annotated[Settings, Depends(api_settings)]
