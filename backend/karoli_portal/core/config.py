from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_env: str = "dev"
    app_port: int = 8080

    # Remote university REST backend
    university_api_url: str = ""
    university_timeout_seconds: int = 30
    university_verify_ssl: bool = True

    # Identity provider: tokens are issued elsewhere, we only verify them
    identity_jwt_key: str = ""
    identity_jwt_algorithms: List[str] = ["RS256"]
    identity_jwt_audience: Optional[str] = None
    identity_jwt_issuer: Optional[str] = None
    identity_session_cookie: str = "__session"
    identity_sign_in_url: str = "/sign-in"

    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None


    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
