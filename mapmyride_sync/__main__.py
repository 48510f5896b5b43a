from mapmyride_sync.cli import app

app(prog_name="mapmyride-sync")
