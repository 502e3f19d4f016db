"""
Configuration management for the Idea Graph backend.
"""

import os
from typing import Dict, Any, Optional, List
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class LLMConfig(BaseModel):
    """Configuration for the generative model endpoint."""
    provider: str = "gemini"
    model: str = Field(default="gemini-2.5-flash-lite")
    api_key: Optional[str] = Field(default=None, validate_default=True)
    # OpenAI-compatible chat completions endpoint
    api_base: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    max_tokens: int = 4000
    temperature: float = 1.0
    timeout: int = 120

    @field_validator('api_key', mode='before')
    @classmethod
    def validate_api_key(cls, v):
        # Defer hard validation to the model call so the app can boot without a key
        if v:
            return v
        return os.getenv('GEMINI_API_KEY') or os.getenv('OPENAI_API_KEY') or None

    @field_validator('model')
    @classmethod
    def validate_model(cls, v):
        if not v:
            v = os.getenv('IDEAGRAPH_MODEL', 'gemini-2.5-flash-lite')
        return v


class GenerationConfig(BaseModel):
    """Configuration for idea generation and graph assembly."""
    engine_version: str = "2.5-gemini"
    max_topic_length: int = 200


class WebConfig(BaseModel):
    """Configuration for the web application."""
    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False
    secret_key: Optional[str] = Field(default=None, validate_default=True)
    max_content_length: int = 1024 * 1024  # 1MB
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:3001",
            "http://127.0.0.1:3000",
        ]
    )

    @field_validator('secret_key')
    @classmethod
    def validate_secret_key(cls, v):
        if not v:
            v = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
        return v


class LoggingConfig(BaseModel):
    """Configuration for loguru sinks."""
    level: str = "INFO"
    serialize: bool = False


class AppConfig(BaseSettings):
    """Main application configuration."""
    llm: LLMConfig = Field(default_factory=LLMConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='IDEAGRAPH_',
        extra='ignore',
    )

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Create configuration from environment variables."""
        config = cls()

        if os.getenv('GEMINI_API_KEY'):
            config.llm.api_key = os.getenv('GEMINI_API_KEY')
        elif os.getenv('OPENAI_API_KEY'):
            config.llm.api_key = os.getenv('OPENAI_API_KEY')

        if os.getenv('IDEAGRAPH_PROVIDER'):
            config.llm.provider = os.getenv('IDEAGRAPH_PROVIDER')

        if os.getenv('IDEAGRAPH_MODEL'):
            config.llm.model = os.getenv('IDEAGRAPH_MODEL')

        if os.getenv('IDEAGRAPH_API_BASE'):
            config.llm.api_base = os.getenv('IDEAGRAPH_API_BASE')

        for key_env, section, attr, cast in [
            ('IDEAGRAPH_MAX_TOKENS', config.llm, 'max_tokens', int),
            ('IDEAGRAPH_TEMPERATURE', config.llm, 'temperature', float),
            ('IDEAGRAPH_TIMEOUT', config.llm, 'timeout', int),
            ('IDEAGRAPH_MAX_TOPIC_LENGTH', config.generation, 'max_topic_length', int),
            ('PORT', config.web, 'port', int),
        ]:
            if os.getenv(key_env):
                setattr(section, attr, cast(os.getenv(key_env)))

        if os.getenv('IDEAGRAPH_ENGINE_VERSION'):
            config.generation.engine_version = os.getenv('IDEAGRAPH_ENGINE_VERSION')

        if os.getenv('IDEAGRAPH_DEBUG'):
            config.web.debug = os.getenv('IDEAGRAPH_DEBUG').lower() == 'true'

        # Single origin (legacy) is prepended to the defaults; the list form replaces them
        if os.getenv('CORS_ORIGIN'):
            origin = os.getenv('CORS_ORIGIN').strip()
            if origin and origin not in config.web.cors_origins:
                config.web.cors_origins = [origin] + config.web.cors_origins
        if os.getenv('IDEAGRAPH_CORS_ORIGINS'):
            origins = os.getenv('IDEAGRAPH_CORS_ORIGINS')
            config.web.cors_origins = [o.strip() for o in origins.split(',') if o.strip()]

        if os.getenv('IDEAGRAPH_LOG_LEVEL'):
            config.logging.level = os.getenv('IDEAGRAPH_LOG_LEVEL').upper()
        if os.getenv('IDEAGRAPH_LOG_JSON'):
            config.logging.serialize = os.getenv('IDEAGRAPH_LOG_JSON').lower() == 'true'

        return config

    @classmethod
    def from_yaml(cls, path: Path) -> 'AppConfig':
        """Create configuration from YAML file."""
        import yaml

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'llm': self.llm.model_dump(),
            'generation': self.generation.model_dump(),
            'web': self.web.model_dump(),
            'logging': self.logging.model_dump(),
        }


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
