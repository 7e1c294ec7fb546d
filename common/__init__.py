import argparse

import boto3

from settings import SETTINGS

USAGE = (
    "%(prog)s [-i TYPE] -s SUBNET [-g GROUP] [-k KEYPAIR] -n NAME [-d SIZE] [-h]"
)


class BoshLadleError(Exception):
    pass


class ConfigurationError(BoshLadleError):
    """
    Required configuration is missing from the environment.
    """


class UsageError(BoshLadleError):
    """
    Command line could not be parsed or lacks a required option.
    """


class Configuration:
    """
    Everything the tool takes from the process environment, read once per
    invocation.
    """

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        region: str = SETTINGS.DEFAULT_AWS_REGION,
        image_id: str = None,
    ):
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.region = region
        self.image_id = image_id

    @classmethod
    def from_environ(cls, environ):
        """
        :param environ: mapping of environment variables, e.g. os.environ
        :raises ConfigurationError: naming the first missing credential
        """
        for variable in SETTINGS.REQUIRED_ENVIRONMENT:
            if not environ.get(variable):
                raise ConfigurationError(
                    f"Please set {variable} in the environment"
                )

        access_key_id, secret_access_key = (
            environ[variable] for variable in SETTINGS.REQUIRED_ENVIRONMENT
        )
        region = next(
            (
                environ[variable]
                for variable in SETTINGS.REGION_ENVIRONMENT
                if environ.get(variable)
            ),
            SETTINGS.DEFAULT_AWS_REGION,
        )
        return cls(
            access_key_id,
            secret_access_key,
            region=region,
            image_id=environ.get(SETTINGS.IMAGE_ID_ENVIRONMENT) or None,
        )


class OptionsArgumentParser(argparse.ArgumentParser):
    """
    Raises UsageError instead of printing and exiting, so the entry point
    decides what a bad command line means for the process.
    """

    def error(self, message):
        raise UsageError(message)

    def parse_args(self, args=None, namespace=None):
        parsed_args, unknown = self.parse_known_args(args, namespace)
        if unknown:
            raise UsageError(f"unknown argument '{unknown[0]}'")
        return parsed_args


def root_parser():
    """
    parses arguments passed on command line when running program
    :return: parser for the spin-up options
    """
    parser = OptionsArgumentParser(
        prog="bosh_ladle",
        usage=USAGE,
        description="Spin up a BOSH Lite VM on AWS EC2",
        formatter_class=argparse.RawTextHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    # options default to None so an explicitly given value can be told apart
    # from a settings default
    parser.add_argument(
        "--instance-type",
        "-i",
        help=f"EC2 instance type (default: {SETTINGS.DEFAULT_INSTANCE_TYPE})",
    )
    parser.add_argument(
        "--subnet-id", "-s", help="ID of the VPC subnet to launch into"
    )
    parser.add_argument(
        "--security-group",
        "-g",
        help="name of the security group in the subnet's VPC "
        f"(default: {SETTINGS.DEFAULT_SECURITY_GROUP})",
    )
    parser.add_argument(
        "--key-pair",
        "-k",
        help=f"EC2 key pair name (default: {SETTINGS.DEFAULT_KEY_PAIR})",
    )
    parser.add_argument("--name", "-n", help="Name tag of the VM")
    parser.add_argument(
        "--disk-size",
        "-d",
        type=int,
        help=f"root volume size in GiB (default: {SETTINGS.DEFAULT_DISK_SIZE})",
    )
    parser.add_argument(
        "--help",
        "-h",
        help="show this help message and exit",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--log-file",
        help="path to log file, if logs should also go to a file",
        default=SETTINGS.DEFAULT_LOG_FILE,
    )
    parser.add_argument(
        "--debug",
        help="output debug information to help troubleshoot issues",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--json-logging",
        help="Enable logging in json logging format",
        default=False,
        action="store_true",
    )
    return parser


def get_ec2_client(configuration: Configuration):
    """
    construct EC2 client authenticated with the configured credentials
    :param configuration: obj: of :class:`Configuration`
    :return: obj: boto3 EC2 client
    """
    return boto3.client(
        "ec2",
        aws_access_key_id=configuration.access_key_id,
        aws_secret_access_key=configuration.secret_access_key,
        region_name=configuration.region,
    )
