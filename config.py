import os


def _int_or_none(raw):
    return int(raw) if raw not in (None, '') else None


class Config:
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    HOST = os.environ.get('HOST', '127.0.0.1')
    PORT = int(os.environ.get('PORT', 8000))

    # Comma separated list of front-end origins allowed by CORS
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,http://localhost:4000'
        ).split(',')
        if origin.strip()
    ]

    DEFAULT_VARIABLE = os.environ.get('DEFAULT_VARIABLE', 'x')

    # Limits for the random expression generator endpoint
    MAX_GENERATED_TERMS = int(os.environ.get('MAX_GENERATED_TERMS', 10))
    MAX_GENERATED_DEPTH = int(os.environ.get('MAX_GENERATED_DEPTH', 5))
    GENERATOR_SEED = _int_or_none(os.environ.get('GENERATOR_SEED'))
