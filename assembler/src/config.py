from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    # Synthesis toolchain
    bootstrap_install_command: str = "npm install -g aws-cdk ts-node typescript"
    synth_command: str = "cdk synth"

    # Source retrieval
    default_token_secret_name: str = "GITHUB_TOKEN"
    source_action_name: str = "GitHub"
    synth_action_name: str = "Synth"

    default_subdirectory: str = "."
    pipeline_name_suffix: str = "-pipeline"

    class Config:
        env_file = ".env"

@lru_cache()
def get_settings() -> Settings:
    return Settings()
