"""Conversion session: parse, normalize, edit and render in one place."""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from comware_aruba.errors import ConversionWarning, ConverterError
from comware_aruba.generator.aruba import ArubaConfigGenerator
from comware_aruba.model.config import SwitchConfig, UnmappedPort
from comware_aruba.model.stack import StackUnit
from comware_aruba.parser.config import parse_comware_config
from comware_aruba.settings import ConverterSettings, load_settings
from comware_aruba.utils.normalize import normalize_switch_config
from comware_aruba.utils.render import render_tables
from comware_aruba.utils.topology import build_stack

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of a one-shot :func:`convert` call.

    Attributes:
        text: Generated AOS-CX configuration.
        config: The normalized model the text was rendered from.
        unmapped: Ports left out of *text*.
    """

    text: str
    config: SwitchConfig
    unmapped: list[UnmappedPort] = field(default_factory=list)


class ComwareToArubaConverter:
    """Stateful front end for an interactive conversion.

    Holds one source configuration, the target stack and the operator
    parameters.  Every mutator returns freshly rendered text so a live
    preview can be refreshed directly from the return value.

    Args:
        stack_models: Hardware model tag per stack unit, unit 1 first.
        hostname: Target hostname.  When ``None`` the ``sysname`` of the
            loaded source is used, then the settings default.
        password: Administrator password; the settings default when ``None``.
        settings: Site settings; the bundled defaults when omitted.
    """

    def __init__(
        self,
        stack_models: Sequence[str] = ("48",),
        *,
        hostname: str | None = None,
        password: str | None = None,
        settings: ConverterSettings | None = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.stack: list[StackUnit] = build_stack(stack_models)
        self.password = password
        self._hostname = hostname
        self._generator = ArubaConfigGenerator(self.settings)
        self._config: SwitchConfig | None = None

    # ------------------------------------------------------------------
    # Source and topology
    # ------------------------------------------------------------------

    def load(self, text: str) -> SwitchConfig:
        """Parse and normalize *text*, discarding any previously loaded model."""
        self._config = parse_comware_config(text, self.stack)
        for u in self._config.unmapped:
            logger.debug("Unmapped after load: %s (%s)", u.entry.source_name, u.reason)
        return self._config

    def set_stack(self, stack_models: Sequence[str]) -> None:
        """Change the target stack and re-map the loaded ports.

        Manual edits survive: ports are re-mapped from their source names
        with a fresh SFP allocator.
        """
        self.stack = build_stack(stack_models)
        if self._config is not None:
            normalize_switch_config(self._config, self.stack)

    @property
    def config(self) -> SwitchConfig:
        """The loaded model.

        Raises:
            ConverterError: If no configuration has been loaded.
        """
        if self._config is None:
            raise ConverterError("No configuration loaded; call load() first")
        return self._config

    @property
    def hostname(self) -> str:
        """Effective target hostname."""
        if self._hostname:
            return self._hostname
        if self._config is not None and self._config.metadata.get("hostname"):
            return self._config.metadata["hostname"]
        return self.settings.default_hostname

    @hostname.setter
    def hostname(self, value: str | None) -> None:
        self._hostname = value

    @property
    def unmapped(self) -> list[UnmappedPort]:
        """Ports the current stack cannot hold."""
        return list(self.config.unmapped)

    # ------------------------------------------------------------------
    # Manual edits
    # ------------------------------------------------------------------

    def set_description(self, key: str, description: str) -> str:
        """Edit the description of an SVI, LAG or port and re-render."""
        self.config.set_description(key, description)
        return self.render()

    def set_lag_membership(self, key: str, lag: str | None) -> str:
        """Move port *key* into LAG *lag* (``None`` to detach) and re-render."""
        self.config.set_lag_membership(key, lag)
        return self.render()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Render the current model to AOS-CX text."""
        return self._generator.generate(self.config, hostname=self.hostname, password=self.password)

    def tables(self) -> dict[str, list[dict[str, Any]]]:
        """Tabular view of the current model."""
        return render_tables(self.config)


def convert(
    text: str,
    *,
    stack_models: Sequence[str] = ("48",),
    hostname: str | None = None,
    password: str | None = None,
    settings: ConverterSettings | None = None,
) -> ConversionResult:
    """Convert Comware configuration *text* to AOS-CX in one call.

    Ports the stack cannot hold are omitted from the output and reported
    through a single :class:`~comware_aruba.errors.ConversionWarning`.
    """
    converter = ComwareToArubaConverter(
        stack_models, hostname=hostname, password=password, settings=settings
    )
    cfg = converter.load(text)
    result = ConversionResult(text=converter.render(), config=cfg, unmapped=list(cfg.unmapped))
    if result.unmapped:
        names = ", ".join(u.entry.source_name for u in result.unmapped)
        warnings.warn(
            f"{len(result.unmapped)} interface(s) omitted from the output: {names}",
            ConversionWarning,
            stacklevel=2,
        )
    return result
