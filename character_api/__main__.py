"""Run the character API server: python -m character_api."""

from character_api.main import run

if __name__ == "__main__":
    run()
