import yaml
from typing import Dict

from pydantic import BaseModel, field_validator


class DatabaseSettings(BaseModel):
    url: str = "sqlite:///:memory:"
    echo: bool = False


class InterceptorConfig(BaseModel):
    database: DatabaseSettings = DatabaseSettings()
    # repository name -> "module.path:ClassName"
    repositories: Dict[str, str] = {}

    @field_validator("repositories")
    @classmethod
    def _check_repositories(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name, target in value.items():
            if "." in name or not name.isidentifier():
                raise ValueError(f"repository name '{name}' must be an identifier without dots")
            if ":" not in target:
                raise ValueError(f"repository '{name}' must point to 'module:ClassName', got '{target}'")
        return value


class ConfigLoader:
    def __init__(self, config_path: str):
        self.config_path = config_path


    def load(self) -> InterceptorConfig:
        with open(self.config_path, "r") as f:
            raw = yaml.safe_load(f) or {}
        return InterceptorConfig.model_validate(raw)
