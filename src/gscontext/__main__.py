from gscontext.cli import app

app(prog_name="gscontext")
