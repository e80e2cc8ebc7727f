#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - FastAPI Application
HTTP API поверх сервиса привычек: CRUD, отметки за сегодня, тепловая карта, тема
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from habit_tracker.config import TrackerConfig
from habit_tracker.core.exceptions import (
    HabitNotFoundError, HabitTrackerError, StorageError, ValidationError
)
from habit_tracker.services.habit_service import HabitService
from habit_tracker.shared.models import ErrorResponse, HealthCheck
from .api import habits, settings as settings_api
from .config import DashboardSettings, get_settings
from .dependencies import (
    cleanup_resources, get_habit_service, get_tracker_config, init_components, log_request
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(message=message, errors=[message])
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def create_app(settings: Optional[DashboardSettings] = None,
               config: Optional[TrackerConfig] = None) -> FastAPI:
    """Фабрика для создания приложения"""
    settings = settings or get_settings()
    if config is not None:
        # маршруты и /health работают с той же конфигурацией, что и сервис
        init_components(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        logger.info(f"🚀 Запуск {settings.APP_NAME} v{settings.VERSION}...")
        service = init_components(config)
        logger.info(f"📝 Загружено привычек: {len(service.list_habits())}")
        logger.info(f"🌐 API доступен на: {settings.get_full_url(settings.API_PREFIX)}")

        yield

        logger.info("🛑 Остановка API...")
        cleanup_resources()

    app = FastAPI(
        title=settings.APP_NAME,
        description="HTTP API трекера привычек с сериями и тепловой картой",
        version=settings.VERSION,
        docs_url=settings.DOCS_URL,
        redoc_url=settings.REDOC_URL,
        lifespan=lifespan
    )

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Middleware для логирования запросов"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        log_request(request, process_time, response.status_code)
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(HabitNotFoundError)
    async def not_found_handler(request: Request, exc: HabitNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error(422, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"❌ Ошибка хранилища при {request.method} {request.url.path}: {exc}")
        return _error(500, f"Storage error: {exc}")

    @app.exception_handler(HabitTrackerError)
    async def tracker_error_handler(request: Request, exc: HabitTrackerError):
        logger.error(f"❌ Ошибка обработки запроса: {exc}")
        return _error(500, str(exc))

    # ===== МАРШРУТЫ =====

    app.include_router(habits.router, prefix=settings.API_PREFIX)
    app.include_router(settings_api.router, prefix=settings.API_PREFIX)

    @app.get("/health", response_model=HealthCheck, tags=["system"])
    def health_check(
        service: HabitService = Depends(get_habit_service),
        tracker_config: TrackerConfig = Depends(get_tracker_config)
    ):
        """Проверка состояния сервиса"""
        return HealthCheck(
            status="healthy",
            version=settings.VERSION,
            environment=settings.ENVIRONMENT,
            habits_file=str(tracker_config.storage.habits_file),
            habits_total=len(service.list_habits()),
            storage=service.repository.get_stats(),
        )

    return app
