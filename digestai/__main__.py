from digestai.cli import app

app(prog_name="digestai")
