from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from fi_runner.api import ConfigRepository
from fi_ui.presenter import HeadlessPresenter, Presenter, RichPresenter
from fi_ui.report import PropertyReport


@dataclass
class UIContext:
    """Container for CLI services and state, initialized lazily."""

    headless: bool = False

    _console: Optional[Console] = None
    _present: Optional[Presenter] = None
    _config_repository: Optional[ConfigRepository] = None

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console()
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    @property
    def present(self) -> Presenter:
        if self._present is None:
            if self.headless:
                self._present = HeadlessPresenter()
            else:
                self._present = RichPresenter(self.console)
        return self._present

    @present.setter
    def present(self, value: Presenter) -> None:
        self._present = value

    @property
    def config_repository(self) -> ConfigRepository:
        if self._config_repository is None:
            self._config_repository = ConfigRepository()
        return self._config_repository

    @config_repository.setter
    def config_repository(self, value: ConfigRepository) -> None:
        self._config_repository = value

    def property_report(self) -> PropertyReport:
        return PropertyReport(self.console)
