import argparse
import sys

from copy import deepcopy
from tclogger import logger
from pprint import pformat


class ArgParser(argparse.ArgumentParser):
    def __init__(self, *args, argv: list[str] = None, **kwargs):
        super().__init__(*args, **kwargs)

        self.add_argument(
            "-q",
            "--query",
            type=str,
            default="",
            help=f"Search query",
        )
        self.add_argument(
            "-k",
            "--kind",
            type=str,
            default="all",
            help=f"Content kind to search in (cars, guide, column, heritage, news)",
        )
        self.add_argument(
            "-n",
            "--limit",
            type=int,
            help=f"Max number of hits",
        )
        self.add_argument(
            "-d",
            "--data-root",
            type=str,
            help=f"Root dir of content JSON files",
        )
        self.add_argument(
            "-r",
            "--related",
            type=str,
            help=f"Slug to show related shelves for (in --kind), instead of searching",
        )
        self.add_argument(
            "-m",
            "--mode",
            type=str,
            default="prod",
            help=f"Running mode (dev, prod)",
        )
        self.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Log index build details",
        )

        if argv is None:
            argv = sys.argv[1:]
        self.args, self.unknown_args = self.parse_known_args(argv)

    def update_search_envs(self, search_envs: dict, verbose: bool = False):
        new_envs = deepcopy(search_envs)
        new_envs["mode"] = self.args.mode
        mode = new_envs["mode"]
        for key, val in search_envs.items():
            if isinstance(val, dict) and mode in val.keys():
                new_envs[key] = val[mode]

        if self.args.data_root:
            new_envs["data_root"] = self.args.data_root
        if self.args.limit is not None:
            new_envs["limit"] = self.args.limit

        self.new_envs = new_envs

        if verbose:
            logger.note(f"Search Envs:")
            logger.mesg(pformat(new_envs, sort_dicts=False, indent=4))

        return new_envs
