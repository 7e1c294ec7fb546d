APPLICATION_NAME = "bosh-ladle"
APPLICATION_VERSION = "0.1"

# ############## Common settings #############
DEFAULT_LOG_FILE = None
REQUIRED_ENVIRONMENT = ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY"]
REGION_ENVIRONMENT = ["AWS_DEFAULT_REGION", "AWS_REGION"]
IMAGE_ID_ENVIRONMENT = "BOSH_LITE_AMI_ID"
DEFAULT_AWS_REGION = "us-east-1"

# ############## Option defaults ##############
DEFAULT_INSTANCE_TYPE = "m3.xlarge"
DEFAULT_SECURITY_GROUP = "bosh"
DEFAULT_KEY_PAIR = "gocd_bosh_lite"
DEFAULT_DISK_SIZE = 40

# ############## BOSH Lite image settings ##############
BOSH_LITE_IMAGE_NAME = "boshlite-*"
BOSH_LITE_IMAGE_OWNERS = ["self"]
BOSH_LITE_VOLUME_TYPE = "gp2"
