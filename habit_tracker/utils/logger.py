import logging
import logging.config


def setup_logger(config, debug: bool = False) -> logging.Logger:
    """Настройка корневого логгера по TrackerConfig (консоль + ротируемый файл)"""
    if config.log_to_file:
        config.log_dir.mkdir(exist_ok=True, parents=True)
    logging.config.dictConfig(config.get_logging_config())

    logger = logging.getLogger()
    if debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)
    return logger
