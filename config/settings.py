import os
from dataclasses import dataclass
from dotenv import load_dotenv

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')
ASYNC_MODE = os.getenv('ASYNC_MODE', 'threading')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# Lobby Configuration
MAX_PLAYERS = int(os.getenv('MAX_PLAYERS', 4))
MAX_INSPECTORS = int(os.getenv('MAX_INSPECTORS', 2))
MAX_CONNECTIONS = int(os.getenv('MAX_CONNECTIONS', MAX_PLAYERS + MAX_INSPECTORS))
DEFAULT_PLAYER_NAME = os.getenv('DEFAULT_PLAYER_NAME', 'Player')
MIN_NAME_LENGTH = int(os.getenv('MIN_NAME_LENGTH', 3))
MAX_NAME_LENGTH = int(os.getenv('MAX_NAME_LENGTH', 20))

# Server Configuration
PORT = int(os.getenv('PORT', 5000))
DEBUG = os.environ.get('RENDER', '') != 'true'


@dataclass(frozen=True)
class LobbySettings:
    """Configuration consumed by the lobby coordinator."""
    max_players: int = MAX_PLAYERS
    max_inspectors: int = MAX_INSPECTORS
    max_connections: int = MAX_CONNECTIONS
    default_player_name: str = DEFAULT_PLAYER_NAME
    min_name_length: int = MIN_NAME_LENGTH
    max_name_length: int = MAX_NAME_LENGTH
