from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://gym_user:gym_password@db:5432/gym_registration"
    SECRET_KEY: str = "SECRET_KEY_FOR_GYM_REGISTRATION"
    ALGORITHM: str = "HS256"
    # Сессия живёт 2 часа с момента выдачи токена
    SESSION_EXPIRE_MINUTES: int = 120
    # При продакшн/обычной разработке лучше не пересоздавать БД на каждом старте
    RESET_DATABASE: bool = False
    DB_ECHO: bool = False

    GRPC_HOST: str = "[::]"
    GRPC_PORT: int = 50051
    GRPC_SHUTDOWN_GRACE: float = 5.0

    DEFAULT_PAGE_SIZE: int = 20
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

settings = Settings()
