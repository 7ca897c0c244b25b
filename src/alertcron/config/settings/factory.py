"""Config settings – SettingsFactory."""
from __future__ import annotations

from typing import Any, Sequence, TypeVar

from alertcron.config.settings.base import Settings
from alertcron.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from alertcron.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from alertcron.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

_log = get_logger(__name__)


class SettingsFactory:
    """Merge outputs from multiple loaders, apply overrides, and construct
    a settings dataclass in one step.

    Loaders are applied in order; later loaders override earlier ones for
    overlapping fields. *overrides* (if provided) take the highest
    priority. A loader that raises is skipped (and logged) so the remaining
    loaders may still contribute values; an invalid value is never skipped.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Parameters
        ----------
        settings_cls:
            The :class:`~alertcron.config.settings.base.Settings` subclass to
            construct.
        loaders:
            Ordered loaders; defaults to a single :class:`EnvSettingsLoader`.
        overrides:
            Explicit key-value pairs applied after all loaders, useful for
            tests and host programs.

        Raises
        ------
        MissingRequiredSettingError
            When a required field is absent after all sources were merged.
        ConfigError
            On any other construction failure, including failed validation.
        """
        merged: dict[str, Any] = {}

        for loader in loaders if loaders is not None else [EnvSettingsLoader()]:
            try:
                instance = loader.load(settings_cls)
            except InvalidSettingValueError:
                raise
            except Exception as exc:  # noqa: BLE001 – skip failing loaders
                _log.warning("settings.loader_skipped", loader=type(loader).__name__, error=str(exc))
                continue
            merged.update(instance.as_dict())

        if overrides:
            merged.update(overrides)

        for name in settings_cls.required_fields():
            if name not in merged:
                raise MissingRequiredSettingError(name)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
