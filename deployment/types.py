import click

from deployment.config import VERSION_PATTERN


class CompilerVersion(click.ParamType):
    name = "compiler_version"

    def convert(self, value, param, ctx):
        value = str(value).strip().lstrip("v")
        if not VERSION_PATTERN.match(value):
            self.fail(f"{value} is not a valid solc version (expected X.Y.Z)", param, ctx)
        return value
