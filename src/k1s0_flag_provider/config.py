"""プロバイダ設定（pydantic BaseModel）と YAML 読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ProviderConfigError, ProviderConfigErrorCodes

# YAML 内でプロバイダ設定をネストする場合のセクション名
SECTION_NAME = "flag_provider"


class ProviderOptions(BaseModel):
    """リモート評価プロバイダの設定。"""

    endpoint: str
    timeout_seconds: float = Field(default=10.0, gt=0)
    api_key: str = Field(default="", repr=False)

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return value


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProviderConfigError(
            code=ProviderConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ProviderConfigError(
            code=ProviderConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise ProviderConfigError(
            code=ProviderConfigErrorCodes.PARSE_YAML,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def load_options(path: Path) -> ProviderOptions:
    """設定ファイルを読み込んで ProviderOptions を返す。

    トップレベル、または flag_provider セクション配下のどちらの形式も受け付ける。
    """
    data = _read_yaml(path)
    section = data.get(SECTION_NAME)
    if isinstance(section, dict):
        data = section
    try:
        return ProviderOptions.model_validate(data)
    except ValidationError as e:
        raise ProviderConfigError(
            code=ProviderConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
