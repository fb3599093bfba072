"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the missing components of the CLI interaction, including the option that none are included.

Typical usage example:

    crtutils
    OR
    python -m crtutils reconstruct --number 19122025 --moduli 32,12,28,77
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import pathlib
import sys
import typing
import warnings

import crtutils


def int_list(text: str) -> list[int]:
    """Parse a comma separated list of integers."""
    items = [int(part) for part in text.split(",") if part.strip()]
    if not items:
        raise ValueError("At least one integer is required.")
    return items


def observation_list(text: str) -> list[tuple[int, int]]:
    """Parse a comma separated list of `residue:modulus` observations."""
    items = []
    for part in text.split(","):
        if not part.strip():
            continue
        residue, sep, modulus = part.partition(":")
        if not sep:
            raise ValueError(f"Observation {part} is not of the form residue:modulus.")
        items.append((int(residue), int(modulus)))
    if not items:
        raise ValueError("At least one observation is required.")
    return items


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in CRT Utils.",
            choices=["bezout", "reconstruct", "combine", "show"],
        ),
    "bezout":
        HelpData("Bezout coefficient self-check."),
    "reconstruct":
        HelpData("Reconstruct a known number from its remainders."),
    "combine":
        HelpData("Combine residue observations into one congruence."),
    "show":
        HelpData("Show an exported congruence."),
    "x":
        HelpData(
            description="First operand of the Bezout identity.",
            format=int,
        ),
    "y":
        HelpData(
            description="Second operand of the Bezout identity.",
            format=int,
        ),
    "number":
        HelpData(
            description="The number to reduce and reconstruct.",
            format=int,
        ),
    "moduli":
        HelpData(
            description="Comma separated moduli, e.g. 32,12,28.",
            format=int_list,
        ),
    "observations":
        HelpData(
            description="Comma separated residue:modulus pairs, e.g. 1:4,5:6.",
            format=observation_list,
        ),
    "checked":
        HelpData(
            description="Reject observations that contradict each other?",
            choices=["Y", "N"],
            advanced=True,
            default="N",
        ),
    "output":
        HelpData(
            description="Location to export the combined congruence to. Leave empty to skip.",
            format=str,
            advanced=True,
            default="",
        ),
    "input":
        HelpData(
            description="Location of the congruence file.",
            format=pathlib.Path,
        ),
}

needs = {
    "bezout": ("x", "y"),
    "reconstruct": ("number", "moduli"),
    "combine": ("observations", "checked", "output"),
    "show": ("input",),
}

corep = argparse.ArgumentParser(prog="crtutils")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {crtutils.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

bezout = commands.add_parser("bezout", help=help_dict["bezout"].description)
bezout.add_argument("--x", "-x", type=help_dict["x"].format, help=help_dict["x"].description)
bezout.add_argument("--y", "-y", type=help_dict["y"].format, help=help_dict["y"].description)

reconstruct = commands.add_parser("reconstruct", help=help_dict["reconstruct"].description)
reconstruct.add_argument("--number", "-N", type=help_dict["number"].format, help=help_dict["number"].description)
reconstruct.add_argument("--moduli", "-m", type=help_dict["moduli"].format, help=help_dict["moduli"].description)

combine = commands.add_parser("combine", help=help_dict["combine"].description)
combine.add_argument("--observations",
                     "-O",
                     type=help_dict["observations"].format,
                     help=help_dict["observations"].description)
combine.add_argument("--checked", "-c", action="store_const", const="Y", help=help_dict["checked"].description)
combine.add_argument("--output", "-o", type=help_dict["output"].format, help=help_dict["output"].description)

show = commands.add_parser("show", help=help_dict["show"].description)
show.add_argument("--input", "-i", type=help_dict["input"].format, help=help_dict["input"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    """Resolves a missing CRT argument without prompting, when the modes allow it.

    Args:
        arg: Key of `help_dict` for the missing argument.
        mode: The `(non_interactive, advanced)` flags.

    Returns:
        The argument's default if it can be used silently, otherwise its `HelpData` for prompting.

    Raises:
        IOError: If non-interactive mode is active and the argument has no default.
    """
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"--{arg} is required when running crtutils non-interactively.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    """Prompts for one of the fixed choices of `arg`, such as the subcommand or the checked flag."""
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"\n{arg}: {helper_data.description}")
    for choice in helper_data.choices:
        marker = " [default]" if choice == helper_data.default else ""
        detail = help_dict[choice].description if choice in help_dict else ""
        prntr(f"  {choice}{marker}" + (f"  {detail}" if detail else ""))
    while True:
        ch = input(f"{arg}> ")
        if ch in helper_data.choices:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr(f"{ch!r} is not one of: {', '.join(helper_data.choices)}")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    """Prompts for a free-form CRT argument, retrying until its parser accepts the text."""
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"\n{arg}: {helper_data.description}")
    if helper_data.default is not None:
        prntr(f"Press enter to keep {helper_data.default!r}.")
    parse = helper_data.format
    while True:
        ch = input(f"{arg}> ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if not ch:
            prntr(f"{arg} cannot be empty.")
            continue
        try:
            return parse(ch)
        except ValueError as exc:
            prntr(f"Could not read {arg} from {ch!r}: {exc}")


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to CRT Utils!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    match args.subcommand:
        case "bezout":
            try:
                print(crtutils.describe_bezout(args.x, args.y))
            except ValueError as exc:
                print(f"Invalid operands: {exc}")
                sys.exit(1)
        case "reconstruct":
            pspr(f"\n\tReconstructing the number {args.number} from its remainders on these integers:"
                 f"\n\t {args.moduli}")
            if any(m <= 0 for m in args.moduli):
                print("Moduli must be positive!")
                sys.exit(1)
            result = crtutils.Congruence.identity()
            for observed, result in crtutils.trace_reconstruct(args.number, args.moduli):
                pspr("\n => merging:  " + observed.describe(args.number))
                pspr("    result:  " + result.describe(args.number))
            pspr("\nReconstruction:")
            print(f"{result.r} (mod {result.m})")
            if not result.verify(args.number):
                print("Reconstruction Verification Failed!")
                sys.exit(1)
            pspr("Reconstruction Verified!")
        case "combine":
            checked = args.checked == "Y"
            if not checked:
                warnings.warn("Unchecked combination trusts the observations to be consistent.", RuntimeWarning)
            try:
                result = crtutils.combine(args.observations, checked)
            except crtutils.InconsistentEvidenceError as exc:
                print(f"Observations are inconsistent: {exc}")
                sys.exit(1)
            except ValueError as exc:
                print(f"Invalid observation: {exc}")
                sys.exit(1)
            pspr("Combined congruence:")
            print(f"{result.r} (mod {result.m})")
            if args.output:
                crtutils.export_congruence(result, pathlib.Path(args.output))
                pspr(f"\nCongruence exported to {args.output}!")
        case "show":
            result = crtutils.import_congruence(args.input)
            print(f"{result.r} (mod {result.m})")
    pspr("Thank you for using CRT Utils!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
