import click

from ..exceptions import MountSpecError
from ..parser import MountOpt, parse


class MountType(click.ParamType):
    """
    Parameter type for a single mount specification. Converts the value to a
    MountDescriptor, failing with the parser's message on bad input.
    """
    name = MountOpt.type_name

    def convert(self, value, param, ctx):
        try:
            return parse(value)
        except MountSpecError as e:
            self.fail(str(e), param, ctx)


def collect_mounts(ctx, param, value):
    """
    Option callback for a repeatable --mount option. Returns a MountOpt
    holding every value in the order given.
    """
    mounts = MountOpt()
    for raw in value:
        try:
            mounts.accumulate(raw)
        except MountSpecError as e:
            raise click.BadParameter(str(e), ctx=ctx, param=param)
    return mounts
