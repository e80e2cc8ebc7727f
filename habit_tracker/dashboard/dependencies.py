#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Tracker - Dashboard Dependencies
Провайдеры сервисов для FastAPI и утилиты логирования запросов
"""

import logging
from typing import Optional

from fastapi import Request

from habit_tracker.config import TrackerConfig, get_config
from habit_tracker.database.preferences import PreferenceStore
from habit_tracker.services import habit_service
from habit_tracker.services.habit_service import HabitService

logger = logging.getLogger(__name__)

# ===== ГЛОБАЛЬНЫЕ ПЕРЕМЕННЫЕ =====

# Конфигурация, с которой создано приложение
_tracker_config: Optional[TrackerConfig] = None

# Хранилище настроек (синглтон)
_preference_store: Optional[PreferenceStore] = None

# ===== ИНИЦИАЛИЗАЦИЯ КОМПОНЕНТОВ =====

def init_components(config: Optional[TrackerConfig] = None) -> HabitService:
    """Инициализация сервиса привычек и хранилища настроек"""
    global _tracker_config, _preference_store

    config = config or get_tracker_config()
    logger.info("🔄 Инициализация компонентов...")
    _tracker_config = config
    service = habit_service.initialize_habit_service(config)
    _preference_store = PreferenceStore(config.storage.settings_file)
    logger.info(f"✅ Компоненты инициализированы, данные: {config.storage.habits_file}")
    return service

# ===== ЗАВИСИМОСТИ =====

def get_tracker_config() -> TrackerConfig:
    if _tracker_config is None:
        return get_config()
    return _tracker_config

def get_habit_service() -> HabitService:
    if _tracker_config is None:
        return init_components()
    return habit_service.get_habit_service()

def get_preference_store() -> PreferenceStore:
    global _preference_store

    if _preference_store is None:
        _preference_store = PreferenceStore(get_tracker_config().storage.settings_file)
    return _preference_store

# ===== УТИЛИТЫ =====

def get_client_ip(request: Request) -> str:
    """Получить IP адрес клиента"""
    # Проверяем заголовки прокси
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"

def log_request(request: Request, response_time: float, status_code: int):
    """Логирование запроса"""
    logger.info(
        f"{request.method} {request.url.path} "
        f"- {status_code} - {response_time:.3f}s "
        f"- {get_client_ip(request)}"
    )

# ===== ОЧИСТКА РЕСУРСОВ =====

def cleanup_resources():
    """Сброс синглтонов при остановке приложения"""
    global _tracker_config, _preference_store

    logger.info("🧹 Очистка ресурсов...")
    _tracker_config = None
    _preference_store = None
    habit_service.reset_habit_service()
    logger.info("✅ Ресурсы очищены")
