from unittest.mock import Mock

import pytest

from cli import Cli


@pytest.fixture(scope="session")
def working_directory(tmpdir_factory):
    return tmpdir_factory.mktemp("data")


@pytest.fixture
def key_id():
    return "qux"


@pytest.fixture
def key_secret():
    return "barz"


@pytest.fixture
def aws_environ(key_id, key_secret):
    return {"AWS_ACCESS_KEY_ID": key_id, "AWS_SECRET_ACCESS_KEY": key_secret}


@pytest.fixture
def fake_ec2():
    return Mock(name="ec2")


@pytest.fixture
def boto3(mocker, fake_ec2):
    boto3 = mocker.patch("common.boto3")
    boto3.client.return_value = fake_ec2
    return boto3


@pytest.fixture
def spinup(mocker):
    spinup = mocker.patch("cli.spinup")
    spinup.return_value = "i-0123456789abcdef0"
    return spinup


@pytest.fixture
def cli(aws_environ, boto3, spinup):
    return Cli(environ=aws_environ)


@pytest.fixture
def bosh_lite_image():
    return {
        "ImageId": "ami-newest",
        "CreationDate": "2016-03-02T10:00:00.000Z",
        "RootDeviceName": "/dev/sda1",
    }


@pytest.fixture
def ec2_client(bosh_lite_image):
    """
    EC2 client mock answering the lookups spinup makes.
    """
    ec2 = Mock()
    ec2.describe_images.return_value = {
        "Images": [
            {
                "ImageId": "ami-older",
                "CreationDate": "2015-11-20T09:00:00.000Z",
                "RootDeviceName": "/dev/xvda",
            },
            bosh_lite_image,
        ]
    }
    ec2.describe_subnets.return_value = {
        "Subnets": [{"SubnetId": "subnet-deadbeef", "VpcId": "vpc-cafe"}]
    }
    ec2.describe_security_groups.return_value = {
        "SecurityGroups": [{"GroupId": "sg-1234", "GroupName": "where-am-i"}]
    }
    ec2.run_instances.return_value = {
        "Instances": [{"InstanceId": "i-0123456789abcdef0"}]
    }
    return ec2
