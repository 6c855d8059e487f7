import logging

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the whole process"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
