from dataclasses import dataclass, field
from environs import Env

@dataclass
class DBConfig:
    """ PostgreSQL by default, SQLite when driver == 'sqlite' """
    driver: str = 'postgresql'
    host: str = 'localhost'
    port: int | None = None
    name: str | None = None
    user: str | None = None
    password: str = ''
    echo: bool = False

    """ SQLite """
    path: str | None = None

@dataclass
class SessionConfig:
    page_size: int = 10
    clear_screen: bool = True

@dataclass
class LogConfig:
    level: str = 'WARNING'
    file: str | None = None

@dataclass
class Config:
    """ Config """
    db: DBConfig
    session: SessionConfig = field(default_factory=SessionConfig)
    log: LogConfig = field(default_factory=LogConfig)

def load_config(
        dbname: str,
        port: int | None,
        user: str,
        path: str | None = None
) -> Config:
    env = Env()
    env.read_env(path)

    driver = env('DB_DRIVER', 'postgresql')

    return Config(
        db=DBConfig(
            driver=driver,
            host=env('DB_HOST', 'localhost'),
            port=port,
            name=dbname,
            user=user,
            password=env('DB_PASSWORD', ''),
            echo=env.bool('DB_ECHO', False),
            path=dbname if driver == 'sqlite' else None
        ),
        session=SessionConfig(
            page_size=env.int('MESSENGER_PAGE_SIZE', 10),
            clear_screen=env.bool('MESSENGER_CLEAR_SCREEN', True)
        ),
        log=LogConfig(
            level=env('LOG_LEVEL', 'WARNING'),
            file=env('LOG_FILE', None)
        )
    )
