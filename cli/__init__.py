import os
import sys
from collections import namedtuple

import common

from bosh_lite import spinup
from common import ConfigurationError, UsageError
from reporter.local import get_logger
from settings import SETTINGS

USAGE_ERROR_RETURN_CODE = 2
CONFIGURATION_ERROR_RETURN_CODE = 3

HELP_FLAGS = ("-h", "--help")
REQUIRED_OPTIONS = {"subnet_id": "-s/--subnet-id", "name": "-n/--name"}

LoggingOptions = namedtuple(
    "LoggingOptions", ["log_file", "debug", "json_formatter"]
)


class Options:
    """
    Parsed spin-up options. Values not given on the command line are held as
    None and read back as their settings default.
    """

    FIELDS = (
        "instance_type",
        "subnet_id",
        "security_group",
        "key_pair",
        "name",
        "disk_size",
    )

    def __init__(
        self,
        instance_type=None,
        subnet_id=None,
        security_group=None,
        key_pair=None,
        name=None,
        disk_size=None,
        help=False,
        logging=None,
    ):
        self._given = {
            "instance_type": instance_type,
            "subnet_id": subnet_id,
            "security_group": security_group,
            "key_pair": key_pair,
            "name": name,
            "disk_size": disk_size,
        }
        self.help = help
        self.logging = logging or LoggingOptions(
            SETTINGS.DEFAULT_LOG_FILE, False, False
        )

    @classmethod
    def from_args(cls, args):
        return cls(
            **{field: getattr(args, field) for field in cls.FIELDS},
            help=args.help,
            logging=LoggingOptions(args.log_file, args.debug, args.json_logging),
        )

    @property
    def defaults(self) -> dict:
        return {
            "instance_type": SETTINGS.DEFAULT_INSTANCE_TYPE,
            "subnet_id": None,
            "security_group": SETTINGS.DEFAULT_SECURITY_GROUP,
            "key_pair": SETTINGS.DEFAULT_KEY_PAIR,
            "name": None,
            "disk_size": SETTINGS.DEFAULT_DISK_SIZE,
        }

    def __getattr__(self, item):
        if item in Options.FIELDS:
            value = self._given[item]
            return self.defaults[item] if value is None else value

        raise AttributeError(item)

    def given(self, field: str) -> bool:
        return self._given[field] is not None

    def missing(self) -> list:
        """
        Required options that were not given.
        """
        return [field for field in REQUIRED_OPTIONS if not self.given(field)]

    def as_dict(self) -> dict:
        """
        Every field with its effective value, plus `<field>_given: True` for
        each field that came from the command line.
        """
        result = {"help": self.help}
        for field in self.FIELDS:
            result[field] = getattr(self, field)
            if self.given(field):
                result[f"{field}_given"] = True
        return result

    def __eq__(self, other):
        if not isinstance(other, Options):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        return f"Options({self.as_dict()!r})"


class ArgumentsParser:
    """
    Wraps the root parser; parse() returns validated Options or raises
    UsageError.
    """

    def __init__(self):
        self.root_parser = common.root_parser()

    @staticmethod
    def wants_help(argv) -> bool:
        """
        True when a help flag appears before any `--` terminator.
        """
        for token in argv:
            if token == "--":
                return False
            if token in HELP_FLAGS:
                return True
        return False

    def parse(self, argv) -> Options:
        options = Options.from_args(self.root_parser.parse_args(argv))

        missing = options.missing()
        if missing and not options.help:
            raise UsageError(
                "the following arguments are required: "
                + ", ".join(REQUIRED_OPTIONS[field] for field in missing)
            )

        return options

    def print_help(self, file=None):
        self.root_parser.print_help(file)

    def print_usage_error(self, error: UsageError, file=None):
        file = sys.stderr if file is None else file
        self.root_parser.print_usage(file)
        print(f"{self.root_parser.prog}: error: {error}", file=file)


class Cli:
    """
    Entry point. Reads configuration, parses options and spins up a BOSH Lite
    VM.
    """

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ
        self.parser = ArgumentsParser()
        self.configuration = None
        self.options = None
        self._log = None

    @property
    def opts(self) -> dict:
        return self.options.as_dict() if self.options is not None else None

    def _setup_logger(self):
        self._log = get_logger(
            __name__,
            log_file=self.options.logging.log_file,
            debug=self.options.logging.debug,
            json_formatter=self.options.logging.json_formatter,
        )

    def run(self, argv) -> int:
        """
        Help exits with status 0 and bad command lines exit with
        USAGE_ERROR_RETURN_CODE. ConfigurationError and any error from the
        provisioning call propagate.

        :param argv: list: command line arguments, without the program name
        :return: int: status code
        """
        if self.parser.wants_help(argv):
            self.parser.print_help(sys.stdout)
            raise SystemExit(0)

        self.configuration = common.Configuration.from_environ(self.environ)
        ec2 = common.get_ec2_client(self.configuration)

        try:
            self.options = self.parser.parse(argv)
        except UsageError as error:
            self.parser.print_usage_error(error)
            raise SystemExit(USAGE_ERROR_RETURN_CODE)

        self._setup_logger()
        self._log.debug("Parsed options: %s", self.opts)
        self._log.info(
            "Spinning up BOSH Lite VM %s in %s (%s)",
            self.options.name,
            self.options.subnet_id,
            self.configuration.region,
        )

        pinned_image = (
            {"image_id": self.configuration.image_id}
            if self.configuration.image_id
            else {}
        )
        instance_id = spinup(
            ec2,
            self.options.subnet_id,
            self.options.name,
            self.options.security_group,
            self.options.key_pair,
            self.options.instance_type,
            self.options.disk_size,
            **pinned_image,
        )

        self._log.info("Requested instance %s", instance_id)
        return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        return Cli().run(argv)
    except ConfigurationError as error:
        print(f"error: {error}", file=sys.stderr)
        return CONFIGURATION_ERROR_RETURN_CODE
