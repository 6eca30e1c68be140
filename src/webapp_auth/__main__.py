from webapp_auth.main import cli

cli()
