import click


CYAN = lambda s: click.style(s, fg='bright_cyan')
GREEN = lambda s: click.style(s, fg='green')
YELLOW = lambda s: click.style(s, fg='yellow')
RED = lambda s: click.style(s, fg='red')
BOLD = lambda s: click.style(s, bold=True)
