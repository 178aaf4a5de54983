# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Logging setup for the command line.
"""
import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def init_logging(
    name: str = "s2d",
    verbose: bool = False,
    level: Optional[str] = None,
) -> logging.Logger:
    """
    Configures and returns the CLI logger. Library code never calls this; it
    receives the returned logger instead.

    :param name: Logger name.
    :param verbose: Log DEBUG messages to the console.
    :param level: Explicit level name (e.g. 'WARNING'), used when not verbose.
    :return: The configured logger.
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.propagate = False

    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
