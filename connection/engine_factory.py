import importlib

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from config.config_loader import ConfigLoader
from connection.database import Database


def _import_object(target: str):
    module_name, _, attr = target.partition(":")
    module = importlib.import_module(module_name)
    return getattr(module, attr)


class EngineFactory:
    def __init__(self, config_loader: ConfigLoader):
        self.config_loader = config_loader
        self.engine: Engine | None = None

    def create_engine(self) -> Engine:
        settings = self.config_loader.load().database
        url = make_url(settings.url)

        kwargs = {"echo": settings.echo}
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # one shared connection, so worker threads see the same in-memory database
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}

        self.engine = create_engine(url, **kwargs)
        print(f"[EngineFactory] Created engine for {url.render_as_string(hide_password=True)}")
        return self.engine

    def create_database(self) -> Database:
        config = self.config_loader.load()
        engine = self.engine or self.create_engine()

        db = Database(engine)
        for name, target in config.repositories.items():
            db.add_repository(name, _import_object(target))
        return db
