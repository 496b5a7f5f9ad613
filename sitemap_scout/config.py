# === FILE: sitemap_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации SitemapScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска: поиск URL в sitemap и их обход."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    default_sitemap: HttpUrl = Field(
        "https://megabyte.space/sitemap.xml",
        description="Sitemap по умолчанию, если не указаны ни sitemap, ни домен.",
    )
    user_agent: str = Field("SitemapScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    max_concurrency: int = Field(5, ge=1, description="Максимум одновременных запросов при обходе.")
    max_urls_per_run: int = Field(40, ge=0, description="Сколько найденных URL отправлять за один запуск.")
    preview_limit: int = Field(50, ge=0, description="Размер выборки для preview.")
    max_sitemap_depth: int = Field(10, ge=0, description="Максимальная вложенность sitemap index.")
    queue_chunk_size: int = Field(1000, ge=1, description="Размер пачки для внешней очереди.")
    queue_endpoint: Optional[HttpUrl] = Field(
        None, description="Адрес внешней очереди; если задан, URL отправляются туда."
    )
    request_timeout: Optional[float] = Field(
        None, gt=0, description="Таймаут на один запрос (секунд); None означает без таймаута."
    )

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def uses_queue(self) -> bool:
        return self.queue_endpoint is not None


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без явного пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    Отсутствующий явно указанный файл: FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "load_config"]
