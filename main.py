from pathlib import Path

from rich.pretty import pprint

from posixargs import *
from posixargs.utils import Unset

clone = Specification(
    Flag("--progress", descr="enable progress reporting"),
    Flag("-n", "--no_checkout", descr="don't create a checkout"),
    Help("-h", "--help", descr="print help message"),
    Cardinal("repo", descr="repository to clone"),
    Cardinal("dir", type=Path, nargs="?", descr="target directory"),
)

add = Specification(
    Flag("-A", "--all", conflicts="?", descr="add changes from all tracked and untracked files"),
    Flag("-u", "--update", conflicts="?", descr="update tracked files"),
    Help("-h", "--help", descr="print help message"),
    Cardinal("pathspec", type=Path, nargs="*", conflicts="?", descr="file(s) to add/update"),
)

move = Specification(
    Flag("-f", "--force", descr="force move/rename even if target exists"),
    Help("-h", "--help", descr="print help message"),
    Cardinal("source", type=Path, nargs="+", descr="file(s) to move"),
    Cardinal("destination", type=Path, descr="target file name or destination directory"),
)

commit = Specification(
    Flag("-a", "--all", conflicts="?", descr="commit all changed files"),
    Flag("--amend", descr="amend previous commit"),
    Option("-m", "--message", metavar="msg", descr="commit message"),
    Help("-h", "--help", descr="print help message"),
    Cardinal("pathspec", type=Path, nargs="*", conflicts="?", descr="file(s) to commit"),
)

git = Specification(
    Option("-C", "--dir", metavar="path", type=Path, descr="set working directory"),
    Version("--version", descr="print version information"),
    Help("-h", "--help", descr="print help message"),
    Subcommand(
        "command",
        Command("clone", descr="clone repository", specification=clone),
        Command("add", descr="add file(s)", specification=add),
        Command("move_", "mv", descr="move or rename file(s)", specification=move),
        Command("commit", "co", descr="commit changes", specification=commit),
        descr="command to run",
    ),
    version="0.1.0",
)


def main(source=Unset, /):
    args = invoke(git, source)
    pprint(args)
    pprint(invoke(args.command.specification, args.command.args))


if __name__ == '__main__':
    main()
