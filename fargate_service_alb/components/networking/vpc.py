"""
VPC Component Resource for Network Infrastructure.

Steps & Architecture:
1. VPC (10.0.0.0/16): the isolated network container, DNS enabled so the
   service discovery namespace resolves inside it.
2. Internet Gateway (IGW): the "door" to the internet for the public subnets.
3. Per availability zone (2 AZs):
   - Public subnet (/18): hosts the internet-facing ALB and the NAT gateway.
   - Elastic IP + NAT gateway: outbound path for tasks in the private subnet
     (image pulls, CloudWatch Logs).
   - Private subnet (/18): Fargate tasks, no public IPs.
   - Private route table: 0.0.0.0/0 -> NAT gateway of the same AZ.
4. One public route table: 0.0.0.0/0 -> IGW, shared by both public subnets.

AZ names are looked up from the provider; the first `max_azs` are used.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from fargate_service_alb.configs.base import StackConfig
from fargate_service_alb.configs.constants import ANY_IPV4_CIDR
from fargate_service_alb.topology.descriptors import NetworkDescriptor
from fargate_service_alb.utils.tags import resource_tags


@dataclass
class VpcOutputs:
    """Output values from VPC component."""
    vpc_id: pulumi.Output[str]
    public_subnet_ids: list[pulumi.Output[str]]
    private_subnet_ids: list[pulumi.Output[str]]
    nat_gateway_ids: list[pulumi.Output[str]]


class VpcComponent(pulumi.ComponentResource):
    """
    VPC component with public and private subnets in each AZ.

    Each AZ gets its own NAT gateway so losing one AZ does not cut the other
    off from the internet.
    """

    def __init__(
        self,
        name: str,
        config: StackConfig,
        network: NetworkDescriptor,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:Vpc", name, None, opts)
        self.config = config

        child_opts = pulumi.ResourceOptions(parent=self)

        available = aws.get_availability_zones(state="available")
        zones = list(available.names)[: network.max_azs]

        self.vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            cidr_block=network.cidr_block,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags=resource_tags(config, f"{name}-vpc"),
            opts=child_opts,
        )

        self.igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            vpc_id=self.vpc.id,
            tags=resource_tags(config, f"{name}-igw"),
            opts=child_opts,
        )

        self.public_subnets: list[aws.ec2.Subnet] = []
        self.private_subnets: list[aws.ec2.Subnet] = []
        self.nat_gateways: list[aws.ec2.NatGateway] = []

        for index, zone in enumerate(zones):
            self._create_zone(
                name,
                index,
                zone,
                network.public_subnet_cidrs[index],
                network.private_subnet_cidrs[index],
                with_nat=index < network.nat_gateways,
                opts=child_opts,
            )

        self._create_public_route_table(name, child_opts)

        self.register_outputs({
            "vpc_id": self.vpc.id,
            "public_subnet_ids": [subnet.id for subnet in self.public_subnets],
            "private_subnet_ids": [subnet.id for subnet in self.private_subnets],
        })

    def _create_zone(
        self,
        name: str,
        index: int,
        zone: str,
        public_cidr: str,
        private_cidr: str,
        with_nat: bool,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create the public/private subnet pair (and NAT) for one AZ."""
        suffix = f"{index + 1}"

        public_subnet = aws.ec2.Subnet(
            f"{name}-public-subnet-{suffix}",
            vpc_id=self.vpc.id,
            cidr_block=public_cidr,
            availability_zone=zone,
            map_public_ip_on_launch=True,
            tags=resource_tags(self.config, f"{name}-public-subnet-{suffix}"),
            opts=opts,
        )
        self.public_subnets.append(public_subnet)

        private_subnet = aws.ec2.Subnet(
            f"{name}-private-subnet-{suffix}",
            vpc_id=self.vpc.id,
            cidr_block=private_cidr,
            availability_zone=zone,
            tags=resource_tags(self.config, f"{name}-private-subnet-{suffix}"),
            opts=opts,
        )
        self.private_subnets.append(private_subnet)

        routes = []
        if with_nat:
            eip = aws.ec2.Eip(
                f"{name}-nat-eip-{suffix}",
                domain="vpc",
                tags=resource_tags(self.config, f"{name}-nat-eip-{suffix}"),
                opts=opts,
            )
            nat = aws.ec2.NatGateway(
                f"{name}-nat-{suffix}",
                allocation_id=eip.id,
                subnet_id=public_subnet.id,
                tags=resource_tags(self.config, f"{name}-nat-{suffix}"),
                opts=pulumi.ResourceOptions.merge(
                    opts, pulumi.ResourceOptions(depends_on=[self.igw])
                ),
            )
            self.nat_gateways.append(nat)
            routes.append(
                aws.ec2.RouteTableRouteArgs(
                    cidr_block=ANY_IPV4_CIDR,
                    nat_gateway_id=nat.id,
                )
            )

        private_rt = aws.ec2.RouteTable(
            f"{name}-private-rt-{suffix}",
            vpc_id=self.vpc.id,
            routes=routes,
            tags=resource_tags(self.config, f"{name}-private-rt-{suffix}"),
            opts=opts,
        )

        aws.ec2.RouteTableAssociation(
            f"{name}-private-rt-assoc-{suffix}",
            subnet_id=private_subnet.id,
            route_table_id=private_rt.id,
            opts=opts,
        )

    def _create_public_route_table(
        self,
        name: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Route the public subnets through the Internet Gateway."""
        public_rt = aws.ec2.RouteTable(
            f"{name}-public-rt",
            vpc_id=self.vpc.id,
            routes=[
                aws.ec2.RouteTableRouteArgs(
                    cidr_block=ANY_IPV4_CIDR,
                    gateway_id=self.igw.id,
                ),
            ],
            tags=resource_tags(self.config, f"{name}-public-rt"),
            opts=opts,
        )

        for index, subnet in enumerate(self.public_subnets):
            aws.ec2.RouteTableAssociation(
                f"{name}-public-rt-assoc-{index + 1}",
                subnet_id=subnet.id,
                route_table_id=public_rt.id,
                opts=opts,
            )

    def get_outputs(self) -> VpcOutputs:
        """Get VPC output values."""
        return VpcOutputs(
            vpc_id=self.vpc.id,
            public_subnet_ids=[subnet.id for subnet in self.public_subnets],
            private_subnet_ids=[subnet.id for subnet in self.private_subnets],
            nat_gateway_ids=[nat.id for nat in self.nat_gateways],
        )
