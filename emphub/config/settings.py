# emphub/config/settings.py
# Application configuration loaded from the environment

import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Runtime configuration for the application"""

    # Database
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./emphub.db')
    # Only applied to PostgreSQL connections (Render and similar require it)
    DATABASE_SSLMODE = os.getenv('DATABASE_SSLMODE', '')

    # Token settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'employee-management-app-secret')
    ALGORITHM = os.getenv('ALGORITHM', 'HS256')
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', 24 * 60))  # 24 hours

    # Bootstrap admin account
    DEFAULT_ADMIN = {
        'username': os.getenv('DEFAULT_ADMIN_USERNAME', 'admin'),
        'password': os.getenv('DEFAULT_ADMIN_PASSWORD', 'admin123'),
        'name': os.getenv('DEFAULT_ADMIN_NAME', 'Admin User'),
        'mobile': os.getenv('DEFAULT_ADMIN_MOBILE', '9876543210'),
        'job_location': os.getenv('DEFAULT_ADMIN_LOCATION', 'Headquarters'),
    }

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Server
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '8000'))
    RELOAD = os.getenv('RELOAD', 'true').lower() == 'true'

    CORS_ORIGINS = os.getenv(
        'CORS_ORIGINS',
        'http://localhost:3000,http://localhost:5000,http://127.0.0.1:3000',
    )

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Split the comma separated CORS origin list"""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(',') if origin.strip()]

    @classmethod
    def is_sqlite(cls) -> bool:
        return cls.DATABASE_URL.startswith('sqlite')

    @classmethod
    def get_connect_args(cls) -> dict:
        """Driver specific connection arguments for create_engine"""
        if cls.is_sqlite():
            return {'check_same_thread': False}
        if cls.DATABASE_SSLMODE and cls.DATABASE_URL.startswith('postgresql'):
            return {'sslmode': cls.DATABASE_SSLMODE}
        return {}


settings = Settings()
