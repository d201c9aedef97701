"""Registry for dynamically registering and retrieving measurers and exporters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from pageflow.measure.base import BaseMeasurer
    from pageflow.export.base import BaseExporter


T = TypeVar("T")


class _Registry(Generic[T]):
    """Generic registry for named components."""

    def __init__(self) -> None:
        self._registry: dict[str, type[T]] = {}

    def register(self, name: str, cls: type[T]) -> None:
        self._registry[name] = cls

    def get(self, name: str) -> type[T]:
        if name not in self._registry:
            available = ", ".join(self._registry.keys())
            raise KeyError(f"Unknown component '{name}'. Available: {available}")
        return self._registry[name]

    def create(self, name: str, **kwargs) -> T:
        """Instantiate the component registered under ``name``."""
        return self.get(name)(**kwargs)

    def list(self) -> list[str]:
        return list(self._registry.keys())

    def __contains__(self, name: str) -> bool:
        return name in self._registry


MeasurerRegistry: _Registry[BaseMeasurer] = _Registry()
ExporterRegistry: _Registry[BaseExporter] = _Registry()
