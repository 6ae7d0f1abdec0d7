# mailadmin/logging_config.py

import logging
import logging.config
import os


def setup_logging(log_dir: str = "logs", level: str = "INFO"):
    """
    Configures the logging system for the admin console.

    Records go to two places: the console, and a rotating file under
    ``log_dir`` (5 MB per file, 5 backups). The directory is created if missing.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_file_path = os.path.join(log_dir, 'mailadmin.log')

    LOGGING_CONFIG = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'default',
                'level': level,
                'stream': 'ext://sys.stdout',
            },
            'rotating_file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'formatter': 'default',
                'level': level,
                'filename': log_file_path,
                'maxBytes': 1024 * 1024 * 5,  # 5 MB
                'backupCount': 5,
                'encoding': 'utf-8',
            },
        },
        'loggers': {
            '': {  # Root logger
                'handlers': ['console', 'rotating_file'],
                'level': level,
            },
            # Gradio's HTTP stack is chatty at INFO; records still reach the root handlers
            'httpx': {'level': 'WARNING'},
            'urllib3': {'level': 'WARNING'},
        }
    }

    logging.config.dictConfig(LOGGING_CONFIG)
    root_logger = logging.getLogger()
    root_logger.info("Logging system initialized successfully.")
    root_logger.info(f"Log files will be saved to: {log_file_path}")
    return log_file_path
