import logging
import os
import time
from typing import Optional


def setup_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """
    配置根logger：控制台输出简洁信息，若给出log_dir则另写一份带时间戳的日志文件

    Args:
        log_dir: 日志目录，None表示不写文件
        level: 日志级别

    Returns:
        logging.Logger: 根logger
    """
    logger = logging.getLogger()
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    if log_dir is not None:
        os.makedirs(log_dir, exist_ok=True)
        log_filename = os.path.join(log_dir, f"nelder_mead_{time.strftime('%Y%m%d-%H%M%S')}.log")
        file_handler = logging.FileHandler(log_filename, mode='w', encoding='utf-8')
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)
    return logger
