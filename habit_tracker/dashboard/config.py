#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Dashboard Configuration
Настройки HTTP API с валидацией для разных сред
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    """Настройки веб-дашборда Habit Tracker"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(
        default="Habit Tracker Dashboard",
        description="Название приложения"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Версия API"
    )

    ENVIRONMENT: str = Field(
        default="development",
        description="Среда выполнения (development/production/testing)"
    )

    DEBUG: bool = Field(
        default=True,
        description="Режим отладки"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    DASHBOARD_HOST: str = Field(
        default="0.0.0.0",
        description="Хост для запуска дашборда"
    )

    DASHBOARD_PORT: int = Field(
        default=8000,
        description="Порт для запуска дашборда"
    )

    # ===== CORS НАСТРОЙКИ =====

    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Разрешенные источники для CORS через запятую"
    )

    # ===== API =====

    API_PREFIX: str = Field(
        default="/api",
        description="Префикс маршрутов API"
    )

    DOCS_URL: Optional[str] = Field(
        default="/docs",
        description="URL Swagger документации"
    )

    REDOC_URL: Optional[str] = Field(
        default="/redoc",
        description="URL ReDoc документации"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        """Валидация среды выполнения"""
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('DASHBOARD_PORT')
    @classmethod
    def validate_port(cls, v):
        """Валидация порта"""
        if not 1 <= v <= 65535:
            raise ValueError("DASHBOARD_PORT must be between 1 and 65535")
        return v

    @field_validator('ALLOWED_ORIGINS')
    @classmethod
    def validate_origins(cls, v):
        """Нормализация списка CORS origins"""
        origins = [origin.strip() for origin in v.split(',') if origin.strip()]
        if not origins:
            raise ValueError("ALLOWED_ORIGINS must contain at least one origin")
        return ",".join(origins)

    @field_validator('API_PREFIX')
    @classmethod
    def validate_api_prefix(cls, v):
        if not v.startswith('/'):
            v = '/' + v
        return v.rstrip('/')

    @model_validator(mode='after')
    def validate_production_settings(self):
        """В продакшене отключаем DEBUG и документацию API"""
        if self.ENVIRONMENT == 'production':
            self.DEBUG = False
            self.DOCS_URL = None
            self.REDOC_URL = None
        return self

    # ===== МЕТОДЫ КОНФИГУРАЦИИ =====

    @property
    def origins(self) -> List[str]:
        return self.ALLOWED_ORIGINS.split(',')

    def get_full_url(self, path: str = "") -> str:
        return f"http://{self.DASHBOARD_HOST}:{self.DASHBOARD_PORT}/{path.lstrip('/')}"


@lru_cache()
def get_settings() -> DashboardSettings:
    """Глобальный экземпляр настроек дашборда"""
    return DashboardSettings()
