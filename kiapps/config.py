from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from definitions import DEFAULT_INDEX_URL, PATH_REFERENCE_DATA
from kiapps.extract.schema import COMMENT_URL
from kiapps.ingest.page_loop import MAX_PAGES


class Settings(BaseSettings):
    """
    Central configuration for the scraper: where to look, where to write, and how
    politely to fetch. Every field can be set as KIAPPS_<FIELD> in the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="KIAPPS_",
        extra="ignore",
        populate_by_name=True,
    )

    project_root: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parents[1]
    )

    index_url: str = DEFAULT_INDEX_URL
    comment_url: str = COMMENT_URL

    data_dir: Path = Field(default=Path(PATH_REFERENCE_DATA))
    output_dir: Path = Field(default=Path("artifacts"))

    # morph.io passes its proxy as MORPH_PROXY
    proxy: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("MORPH_PROXY", "KIAPPS_PROXY"),
    )
    request_timeout_s: float = 60.0
    max_retries: int = 2
    pace_min_s: float = 2.0
    pace_jitter_s: float = 4.0

    max_pages: int = Field(default=MAX_PAGES, ge=1)
    gc_hint: bool = True
    documents_per_run: int = Field(default=2, ge=1)

    @field_validator("data_dir", "output_dir", mode="before")
    @classmethod
    def _coerce_path(cls, v):
        # Accept strings from env and coerce; allow Path passthrough.
        if isinstance(v, str):
            return Path(v.strip()).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v

    @computed_field(return_type=Path)
    def db_file(self) -> Path:
        return self.output_dir / "data.sqlite"

    def model_post_init(self, __context) -> None:
        # Resolve relative paths against project_root
        if not self.data_dir.is_absolute():
            self.data_dir = (self.project_root / self.data_dir).resolve()
        if not self.output_dir.is_absolute():
            self.output_dir = (self.project_root / self.output_dir).resolve()
        self.output_dir.mkdir(parents=True, exist_ok=True)


# Lazy singleton
_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
