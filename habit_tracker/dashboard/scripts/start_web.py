#!/usr/bin/env python3
"""
Скрипт запуска HTTP API трекера привычек
Использование: habit-tracker-web [--port PORT] [--host HOST] [--dev] [--reload]
"""

import argparse
import logging
import sys

import uvicorn

from habit_tracker.config import get_config
from habit_tracker.dashboard.config import get_settings
from habit_tracker.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def main():
    """Главная функция запуска веб-сервера"""
    settings = get_settings()

    # Парсинг аргументов
    parser = argparse.ArgumentParser(description='Запуск HTTP API трекера привычек')
    parser.add_argument('--port', type=int, default=settings.DASHBOARD_PORT, help='Порт сервера')
    parser.add_argument('--host', default=settings.DASHBOARD_HOST, help='Хост сервера')
    parser.add_argument('--dev', action='store_true', help='Режим разработки')
    parser.add_argument('--reload', action='store_true', help='Автоперезагрузка при изменениях')

    args = parser.parse_args()

    # Настройка логирования
    try:
        config = get_config()
    except ValueError as e:
        print(f"❌ {e}")
        sys.exit(1)
    setup_logger(config, debug=args.dev)
    logger.debug(f"Конфигурация: {config.to_dict()}")

    if args.dev:
        logger.info("🔧 Режим разработки активирован")

    logger.info(f"🚀 Запуск веб-сервера на http://{args.host}:{args.port}")
    if settings.DOCS_URL:
        logger.info(f"📚 API документация: http://{args.host}:{args.port}{settings.DOCS_URL}")

    # Запуск сервера
    try:
        uvicorn.run(
            "habit_tracker.dashboard.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_config=None,
            access_log=True,
            server_header=False,
            date_header=False
        )
    except KeyboardInterrupt:
        logger.info("👋 Сервер остановлен пользователем")

if __name__ == "__main__":
    main()
