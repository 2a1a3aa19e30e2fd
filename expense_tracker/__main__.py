from expense_tracker.cli import run

run()
