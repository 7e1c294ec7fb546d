from settings import SETTINGS


class BoshLiteError(Exception):
    """
    For errors resolving the resources a BOSH Lite VM is launched with.
    """


class ImageNotFoundError(BoshLiteError):
    pass


class SecurityGroupNotFoundError(BoshLiteError):
    pass


def find_image(ec2, image_id=None):
    """
    Looks up the BOSH Lite machine image.
    :param ec2: obj: boto3 EC2 client
    :param image_id: string: specific AMI to use instead of the newest match
    :return: dict: image description as returned by describe_images
    """
    if image_id:
        images = ec2.describe_images(ImageIds=[image_id])["Images"]
    else:
        images = ec2.describe_images(
            Owners=SETTINGS.BOSH_LITE_IMAGE_OWNERS,
            Filters=[
                {"Name": "name", "Values": [SETTINGS.BOSH_LITE_IMAGE_NAME]},
                {"Name": "state", "Values": ["available"]},
            ],
        )["Images"]

    if not images:
        raise ImageNotFoundError(
            f"No image matching {image_id or SETTINGS.BOSH_LITE_IMAGE_NAME}"
        )

    # ISO 8601 timestamps sort chronologically as strings
    return max(images, key=lambda image: image["CreationDate"])


def find_security_group_id(ec2, subnet_id, group_name):
    """
    Returns the ID of the security group named group_name in the VPC that
    subnet_id belongs to.
    """
    subnet = ec2.describe_subnets(SubnetIds=[subnet_id])["Subnets"][0]
    groups = ec2.describe_security_groups(
        Filters=[
            {"Name": "group-name", "Values": [group_name]},
            {"Name": "vpc-id", "Values": [subnet["VpcId"]]},
        ]
    )["SecurityGroups"]

    if not groups:
        raise SecurityGroupNotFoundError(
            f"Security group '{group_name}' not found in {subnet['VpcId']}"
        )

    return groups[0]["GroupId"]


def spinup(
    ec2,
    subnet_id,
    name,
    security_group,
    key_pair,
    instance_type,
    disk_size,
    image_id=None,
):
    """
    Launches a single BOSH Lite instance. Does not wait for it to start.
    :param ec2: obj: boto3 EC2 client
    :param subnet_id: string: subnet to launch into
    :param name: string: value of the Name tag
    :param security_group: string: security group name
    :param key_pair: string: EC2 key pair name
    :param instance_type: string: EC2 instance type
    :param disk_size: int: root volume size in GiB
    :param image_id: string: pinned AMI, if any
    :return: string: ID of the requested instance
    """
    image = find_image(ec2, image_id)
    security_group_id = find_security_group_id(ec2, subnet_id, security_group)

    response = ec2.run_instances(
        ImageId=image["ImageId"],
        InstanceType=instance_type,
        KeyName=key_pair,
        MinCount=1,
        MaxCount=1,
        SubnetId=subnet_id,
        SecurityGroupIds=[security_group_id],
        BlockDeviceMappings=[
            {
                "DeviceName": image["RootDeviceName"],
                "Ebs": {
                    "VolumeSize": disk_size,
                    "VolumeType": SETTINGS.BOSH_LITE_VOLUME_TYPE,
                    "DeleteOnTermination": True,
                },
            }
        ],
        TagSpecifications=[
            {
                "ResourceType": "instance",
                "Tags": [{"Key": "Name", "Value": name}],
            }
        ],
    )
    return response["Instances"][0]["InstanceId"]
