import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'WARNING').upper()
    LOG_FORMAT = os.getenv('LOG_FORMAT', '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Used when the diff output path has no known image extension
    DIFF_OUTPUT_FORMAT = os.getenv('DIFF_OUTPUT_FORMAT', 'TGA').upper()

class DevelopmentConfig(Config):
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG').upper()

class ProductionConfig(Config):
    pass

config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'default': Config
}

def get_config():
    """Return the config class selected by IMG_COMPARE_ENV"""
    return config.get(os.getenv('IMG_COMPARE_ENV', 'default'), Config)
