"""Allow ``python -m scrapegate``."""

from scrapegate.main import run

if __name__ == "__main__":
    run()
