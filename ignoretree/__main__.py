from ignoretree.cli import app

app(prog_name="ignoretree")
