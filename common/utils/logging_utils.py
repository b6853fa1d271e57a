import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAMESPACE = 'engagement'

LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(name)s (%(filename)s:%(lineno)d): %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _rotating_handler(path: Path, level) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    handler.setLevel(level)
    return handler


def setup_logger(app=None, log_level=None, log_dir=None):
    if log_level is None:
        log_level = logging.INFO

    #NOTE: app.logger 와 서비스 로거(engagement.*)가 같은 핸들러를 공유하도록 구성
    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(log_level)

    logger = app.logger if app else namespace_logger
    logger.setLevel(log_level)

    if namespace_logger.handlers:
        if app and not app.logger.handlers:
            for handler in namespace_logger.handlers:
                app.logger.addHandler(handler)
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    #NOTE: 콘솔 핸들러 - stdout으로 출력
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    #NOTE: 파일 핸들러 - log_dir 이 없으면(테스트 등) 콘솔만 사용
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = _rotating_handler(log_path / 'engagement.log', log_level)
        file_handler.setFormatter(formatter)

        #NOTE: 에러 로그 별도 파일 저장 (저장소 장애 추적용)
        error_handler = _rotating_handler(log_path / 'error.log', logging.ERROR)
        error_handler.setFormatter(formatter)

        handlers.extend([file_handler, error_handler])

    for handler in handlers:
        namespace_logger.addHandler(handler)
        if app:
            app.logger.addHandler(handler)

    return logger


def get_logger(name=None):
    if name:
        return logging.getLogger(f'{LOGGER_NAMESPACE}.{name}')
    return logging.getLogger(LOGGER_NAMESPACE)
