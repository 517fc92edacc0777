"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

Configuration settings for the ecsig command-line tool. Settings are read
from a JSON file in the user data directory, then overridden by command-line
flags.
"""

import argparse
import logging
import os

from appdirs import AppDirs

from ecsig import ECSigError
from ecsig.crypto import curve
from ecsig.util import helpers


# Set the data directory in a OS-appropriate location.
_ad = AppDirs("ecsig", False)
DATA_DIR = _ad.user_data_dir

# The master configuration file name.
CONFIG_NAME = "ecsig.conf"
CONFIG_PATH = os.path.join(DATA_DIR, CONFIG_NAME)

DEFAULT_CURVE = curve.secp256k1.name
DEFAULT_MESSAGE = "foo"
DEFAULT_LOG_LEVEL = "info"

logLevelMap = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "notset": logging.NOTSET,
    "0": logging.NOTSET,
}

log = helpers.getLogger("CONFIG")


def logLvl(s):
    """
    Get the log level from the map.

    Args:
        s (str): A string which is a key for the logLevelMap. Case-insensitive.
    """
    return logLevelMap[s.lower()]


def makeParser():
    parser = argparse.ArgumentParser(
        prog="ecsig",
        description="Generate a key pair, then sign and verify a message digest.",
    )
    parser.add_argument(
        "--curve", help=f"curve name, one of {', '.join(curve.curveNames())}"
    )
    parser.add_argument("--message", help="the message to hash and sign")
    parser.add_argument(
        "--loglevel",
        help="a level name, or comma-separated logger:level pairs, e.g. ECDSA:debug",
    )
    parser.add_argument("--logfile", help="also write logs to this rotating file")
    parser.add_argument(
        "--save",
        action="store_true",
        help="store the given options in the configuration file",
    )
    return parser


class EcsigConfig:
    """
    EcsigConfig is configuration settings. The configuration file is JSON
    formatted. Command-line flags take precedence over the file.
    """

    def __init__(self, argv=None, path=None):
        """
        Args:
            argv (list(str)): optional. Command-line arguments. Default is
                sys.argv[1:].
            path (str): optional. The configuration file. Default is
                CONFIG_PATH.

        Raises:
            ECSigError for unknown arguments or bad settings.
        """
        self.path = path if path else CONFIG_PATH
        helpers.mkdir(os.path.dirname(os.path.abspath(self.path)))
        self.file = helpers.fetchSettingsFile(self.path)
        args, unknown = makeParser().parse_known_args(argv)
        if unknown:
            raise ECSigError(f"unknown arguments: {unknown}")
        self.curveName = args.curve or self.get("curve") or DEFAULT_CURVE
        self.message = (
            args.message if args.message is not None else self.get("message")
        )
        if self.message is None:
            self.message = DEFAULT_MESSAGE
        self.logLevelSpec = args.loglevel or self.get("loglevel") or DEFAULT_LOG_LEVEL
        self.logFile = args.logfile or self.get("logfile")
        self.logLevel = logLvl(DEFAULT_LOG_LEVEL)
        self.moduleLevels = {}
        self.normalize()
        if args.save:
            self.set("curve", self.curveName)
            self.set("message", self.message)
            self.set("loglevel", self.logLevelSpec)
            if self.logFile:
                self.set("logfile", self.logFile)
            self.save()
            log.info(f"settings saved to {self.path}")

    def normalize(self):
        """
        Check the settings, resolving the curve name to its canonical form
        and the log level specifier to levels.

        Raises:
            ECSigError for an unknown curve or a malformed log level.
        """
        self.curveName = curve.getCurve(self.curveName).name
        spec = str(self.logLevelSpec)
        try:
            if any(ch in spec for ch in (",", ":")):
                pairs = (s.split(":") for s in spec.split(","))
                self.moduleLevels = {k: logLvl(v) for k, v in pairs}
            else:
                self.logLevel = logLvl(spec)
        except (KeyError, ValueError):
            raise ECSigError(f"malformed loglevel specifier: {spec}")

    @property
    def params(self):
        """
        The CurveParams for the configured curve.
        """
        return curve.getCurve(self.curveName)

    def set(self, k, v):
        """
        Set the configuration option. The configuration is not saved, so `save`
        should be called separately.

        Args:
            k (str): The setting key.
            v (JSON-encodable): The value.
        """
        self.file[k] = v

    def get(self, *keys):
        """
        Retrieve the setting at the provided key path. Multiple keys can be
        provided, with each successive key being retrieved from the previous
        key's value.

        Args:
            *keys (str): Recursive key list.

        Returns:
            mixed: The configuration value.
        """
        d = self.file
        rVal = None
        for k in keys:
            if not isinstance(d, dict) or k not in d:
                return None
            rVal = d[k]
            d = rVal
        return rVal

    def save(self):
        """
        Save the file.
        """
        helpers.saveJSON(self.path, self.file, indent=4, sort_keys=True)


ecsigConfig = None


def load(argv=None):
    """
    Load and return the current configuration.

    The configuration is only loaded once. Successive calls to the modular
    `load` function will return the same instance.

    Returns:
        EcsigConfig: The current configuration.
    """
    global ecsigConfig
    if not ecsigConfig:
        ecsigConfig = EcsigConfig(argv)
    return ecsigConfig
