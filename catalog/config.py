import os


class Config:
    # MongoDB
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/catalog")
    # Used when MONGO_URI does not name a database
    MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "catalog")
    MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

    # Server
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
