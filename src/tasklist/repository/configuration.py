# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from tasklist import configuration


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded = None
        if configuration.APP_CONFIG_PATH.is_file():
            loaded = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        config = configuration.get_default_configuration()
        if loaded is not None:
            # Keys missing from older config files keep their defaults
            config.update(loaded)
        self._config = config

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        page_size: Optional[int] = None,
        sort_primary: Optional[str] = None,
        sort_secondary: Optional[str] = None,
        remove_sort_secondary: bool = False,
        sort_direction: Optional[str] = None,
        show_header: Optional[bool] = None,
        clear_ids_on_view: Optional[bool] = None,
        log_level: Optional[str] = None,
        data_path: Optional[str] = None,
    ) -> None:
        updates: dict[str, Any] = {
            "page_size": page_size,
            "sort_primary": sort_primary,
            "sort_secondary": sort_secondary,
            "sort_direction": sort_direction,
            "show_header": show_header,
            "clear_ids_on_view": clear_ids_on_view,
            "log_level": log_level,
            "data_path": data_path,
        }
        for key, value in updates.items():
            if value is not None:
                self.config[key] = value  # type: ignore[literal-required]
                self.is_dirty = True
        if remove_sort_secondary:
            self.config["sort_secondary"] = None
            self.is_dirty = True


CONFIGURATION_REPO = ConfigurationRepository()
