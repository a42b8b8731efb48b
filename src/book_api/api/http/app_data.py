from dataclasses import dataclass

from book_api.core.services import DbSessionService
from book_api.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
