from modelgate.cli import app

app()
