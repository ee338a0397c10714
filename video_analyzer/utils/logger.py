import os
import sys
import logging

from video_analyzer.config import config

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
logging_dir = str(config.LOGS_DIR)
logging_path = os.path.join(logging_dir, "videoanalyzer.log")
os.makedirs(logging_dir, exist_ok=True)

# Unknown names fall back to INFO
log_level = getattr(logging, config.LOG_LEVEL, None)
if not isinstance(log_level, int):
    log_level = logging.INFO

logging.basicConfig(
    level=log_level,
    format=logging_str,
    handlers=[
        logging.FileHandler(logging_path),
        logging.StreamHandler(sys.stdout)
    ]
)

logging = logging.getLogger('videoanalyzer')
logging.setLevel(log_level)
