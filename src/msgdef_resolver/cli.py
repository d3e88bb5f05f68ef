"""Main CLI entry point for msgdef-resolver using Cyclopts."""

from cyclopts import App

from msgdef_resolver.cmd import dump_cmd, flatten_cmd, list_cmd

app = App(
    name="msgdef-resolver",
    help="Resolve ROS 2 message definitions and flatten them with their dependencies.",
    help_format="rich",
)


# Register all commands
app.command(name="flatten")(flatten_cmd.flatten)
app.command(name="resolve")(flatten_cmd.resolve)
app.command(name="deps")(flatten_cmd.deps)
app.command(name="list")(list_cmd.list_types)
app.command(name="dump")(dump_cmd.dump)


if __name__ == "__main__":
    app()
