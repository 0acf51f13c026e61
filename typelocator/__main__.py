from typelocator.cli.cli import app

app()
