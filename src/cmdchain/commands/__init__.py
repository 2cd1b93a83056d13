"""Package of built-in, self-contained commands.

The CLI loads the modules in this package dynamically at startup, and chained
commands can run them by name from their before/run/after chains.
Valid command modules in this package should implement an interface like the following:

    def get_help() -> str:
        return "Perform magic."

    def setup_parser(parser: argparse.ArgumentParser) -> None:
        # Optional additions to this command's argparse subparser.
        # For example:
        parser.add_argument("-x", action="store_true", help="Enable effects")

    def run(args: argparse.Namespace) -> bool:
        # Implementation of this command's functionality.
        # Return True on success, False on failure.
        return shell_utils.system("echo hello") == 0

The module's name will be the CLI's positional argument to invoke the command,
and the name a chain entry uses to run it:

    {"name": "magic", "args": {"-x": true}}

For example, invoking `cmdchain --help` with the example code above in
a module file named `magic.py` may produce output like the following:

    $ cmdchain --help
    usage: cmdchain [-h] [-v] [-q] [-y] [-n] [-c CONFIG] {magic,shell} ...

    positional arguments:
      {magic,shell}
        magic          Perform magic.
        shell          Run a shell command.

If the module has attribute `NOT_A_COMMAND=True` set, it will not be included
by argparse as a valid positional argument.
"""
