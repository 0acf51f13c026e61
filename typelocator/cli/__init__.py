from typelocator.cli.cli import app

__all__ = ["app"]
