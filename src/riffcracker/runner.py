import typer

from riffcracker.avi import runner as avi

app = typer.Typer()
app.add_typer(avi.app, name='avi')

if __name__ == "__main__":
    app()
