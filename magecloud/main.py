# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
magecloud - command line entry point
"""

import argparse
import logging
import sys
from typing import List, Optional

from magecloud import __version__
from magecloud.commands.session import show_session_config
from magecloud.commands.update_composer import create_command


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='magecloud', description='Magento cloud deployment tools')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--root', default=None, help='Magento root (default: $MAGENTO_ROOT or current directory)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    update = subparsers.add_parser('update-composer', help='Generate composer.json for installation from git')
    update.add_argument('--no-update', action='store_true', help='Only write composer.json, skip composer update')

    subparsers.add_parser('session-config', help='Print the resolved session configuration')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.command == 'update-composer':
        return create_command(args.root).execute(run_update=not args.no_update)
    return show_session_config(args.root)


if __name__ == '__main__':
    sys.exit(main())
