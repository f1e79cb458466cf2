import logging
import sys

import attr
import click

from .colors import RED
from .commands import docker, keys, parse
from .. import __version__
from ..config import Config
from ..exceptions import BadConfigError
from ..utils.spell import spell_correct


@attr.s
class App(object):
    """
    Main app object that's passed around as the click context obj.
    """
    cli = attr.ib()
    config = attr.ib(default=None, init=False)

    def load_config(self, path=None):
        self.config = Config.from_path(path)


class AppGroup(click.Group):
    """
    Group subclass that instantiates an App instance when called and passes
    the app as the context obj. Commands can be given short aliases, and a
    mistyped command name gets the same "did you mean" hint as a mistyped
    mount key.
    """

    def __init__(self, app_class, **kwargs):
        super(AppGroup, self).__init__(**kwargs)
        self.app = app_class(self)
        self.aliases = {}

    def add_alias(self, command, alias_name):
        self.aliases[alias_name] = command

    def get_command(self, ctx, cmd_name):
        command = super(AppGroup, self).get_command(ctx, cmd_name) or self.aliases.get(cmd_name)
        if command is None:
            suggestion = spell_correct(cmd_name, self.list_commands(ctx) + list(self.aliases))
            if suggestion:
                ctx.fail("No such command '{}', did you mean '{}'?".format(cmd_name, suggestion))
        return command

    def invoke(self, ctx):
        ctx.obj = self.app
        return super(AppGroup, self).invoke(ctx)

    def main(self, *args, **kwargs):
        try:
            return super(AppGroup, self).main(*args, **kwargs)
        except BadConfigError as e:
            click.echo(RED(str(e)), err=True)
            sys.exit(1)


@click.group(cls=AppGroup, app_class=App)
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--verbose", "-v", default=False, is_flag=True)
@click.pass_obj
def cli(app, config_path, verbose):
    """
    mountopt, parses container mount specifications.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    app.load_config(config_path)


cli.add_command(parse)
cli.add_command(keys)
cli.add_command(docker)
cli.add_alias(parse, "p")


# Run CLI if called directly
if __name__ == '__main__':
    cli()
