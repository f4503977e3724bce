"""EC2 lookups that turn VPC, subnet and security group names into ids."""

import functools
import logging
from typing import Iterable

from ..core import BaseClient, CacheKey, Context, NotFoundError, call_with_retry, fetch_all
from ..core.matching import (
    name_filter,
    tag_filter,
    value_for_tag,
    vpc_filter,
    wildcard_matches,
)
from ..models import DiscoverySpec, ResolvedNetwork, SecurityGroupQuery, SubnetQuery

logger = logging.getLogger("vpc_discovery.ec2")


def _unique(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def _joined(values: Iterable[str]) -> str:
    return ",".join(values)


class EC2Client(BaseClient):
    """Resolves a DiscoverySpec against EC2 with caching, paging and retries."""

    def __init__(self, context: Context):
        super().__init__(context)
        self.cache = context.cache

    def _call(self, operation: str, **params) -> dict:
        method = getattr(self.client("ec2"), operation)
        return call_with_retry(
            lambda: method(**params),
            policy=self.context.retry,
            sleep=self.context.sleep,
        )

    def _describe(self, operation: str, results_key: str, filters: list[dict]) -> list:
        logger.debug("%s filters=%s", operation, filters)
        return fetch_all(
            functools.partial(self._call, operation), results_key, Filters=filters
        )

    def get_vpc_id(self, vpc_name: str) -> str:
        return self.cache.vpc_id(vpc_name, lambda: self._lookup_vpc_id(vpc_name))

    def _lookup_vpc_id(self, vpc_name: str) -> str:
        vpcs = self._describe("describe_vpcs", "Vpcs", [tag_filter("Name", [vpc_name])])
        # EC2 expands * and ? in filter values; vpcName is an exact key
        vpcs = [v for v in vpcs if value_for_tag(v.get("Tags"), "Name") == vpc_name]
        if not vpcs:
            raise NotFoundError(
                f"VPC with tag key 'Name' and tag value '{vpc_name}' does not exist.",
                resource="vpc",
                criterion="tag",
                missing=[vpc_name],
                tag_key="Name",
            )
        if len(vpcs) > 1:
            # No tie-break beyond response order
            logger.warning(
                "%d VPCs are tagged Name=%s; using the first: %s",
                len(vpcs),
                vpc_name,
                vpcs[0]["VpcId"],
            )
        return vpcs[0]["VpcId"]

    def get_subnet_ids(self, vpc_id: str, query: SubnetQuery) -> list[str]:
        key = CacheKey.for_subnets(vpc_id, query.tag_key, query.tag_values)
        return self.cache.get_or_resolve(
            key, lambda: self._lookup_subnet_ids(vpc_id, query)
        )

    def _lookup_subnet_ids(self, vpc_id: str, query: SubnetQuery) -> list[str]:
        subnets = self._describe(
            "describe_subnets",
            "Subnets",
            [vpc_filter(vpc_id), tag_filter(query.tag_key, query.tag_values)],
        )
        tag_values = [value_for_tag(s.get("Tags"), query.tag_key) for s in subnets]
        missing = [
            pattern
            for pattern in query.tag_values
            if not any(wildcard_matches(pattern, value) for value in tag_values)
        ]
        if missing:
            raise NotFoundError(
                f"Subnets with vpc id '{vpc_id}', tag key '{query.tag_key}' "
                f"and tag values '{_joined(missing)}' do not exist.",
                resource="subnets",
                criterion="tag",
                missing=missing,
                vpc_id=vpc_id,
                tag_key=query.tag_key,
            )
        return _unique(
            subnet["SubnetId"]
            for subnet, value in zip(subnets, tag_values)
            if any(wildcard_matches(pattern, value) for pattern in query.tag_values)
        )

    def get_security_group_ids(
        self, vpc_id: str, query: SecurityGroupQuery
    ) -> list[str]:
        key = CacheKey.for_security_groups(
            vpc_id, query.names, query.tag_key, query.tag_values
        )
        return self.cache.get_or_resolve(
            key, lambda: self._lookup_security_group_ids(vpc_id, query)
        )

    def _lookup_security_group_ids(
        self, vpc_id: str, query: SecurityGroupQuery
    ) -> list[str]:
        filters = [vpc_filter(vpc_id)]
        criteria = []
        if query.names:
            filters.append(name_filter("group-name", query.names))
            criteria.append(f"names '{_joined(query.names)}'")
        if query.tag_key:
            filters.append(tag_filter(query.tag_key, query.tag_values))
            criteria.append(
                f"tag key '{query.tag_key}' and tag values '{_joined(query.tag_values)}'"
            )

        groups = self._describe("describe_security_groups", "SecurityGroups", filters)
        if not groups:
            raise NotFoundError(
                f"Security groups with vpc id '{vpc_id}', {', '.join(criteria)} "
                "do not exist.",
                resource="security-groups",
                criterion="name" if query.names else "tag",
                missing=list(query.names or []) + list(query.tag_values or []),
                vpc_id=vpc_id,
                tag_key=query.tag_key,
            )

        if query.names:
            group_names = [g.get("GroupName") for g in groups]
            missing = [
                name
                for name in query.names
                if not any(wildcard_matches(name, found) for found in group_names)
            ]
            if missing:
                raise NotFoundError(
                    f"Security groups do not exist for the names '{_joined(missing)}' "
                    f"in vpc '{vpc_id}'.",
                    resource="security-groups",
                    criterion="name",
                    missing=missing,
                    vpc_id=vpc_id,
                )

        if query.tag_key:
            # Exact comparison here, unlike subnet tag values
            found_values = {value_for_tag(g.get("Tags"), query.tag_key) for g in groups}
            missing = [v for v in query.tag_values if v not in found_values]
            if missing:
                raise NotFoundError(
                    f"Security groups do not exist for the tag key '{query.tag_key}' "
                    f"and tag values '{_joined(missing)}' in vpc '{vpc_id}'.",
                    resource="security-groups",
                    criterion="tag",
                    missing=missing,
                    vpc_id=vpc_id,
                    tag_key=query.tag_key,
                )

        return _unique(g["GroupId"] for g in groups if self._group_matches(g, query))

    @staticmethod
    def _group_matches(group: dict, query: SecurityGroupQuery) -> bool:
        if query.names and not any(
            wildcard_matches(name, group.get("GroupName")) for name in query.names
        ):
            return False
        if query.tag_key:
            return value_for_tag(group.get("Tags"), query.tag_key) in query.tag_values
        return True

    def get_vpc_config(self, spec: DiscoverySpec) -> ResolvedNetwork:
        """Resolve VPC id, then subnet ids, then security group ids.

        Keys whose query list is absent from the spec stay None in the result.

        Raises:
            NotFoundError: If the VPC or any requested subnet/group is missing
        """
        vpc_id = self.get_vpc_id(spec.vpc_name)
        logger.info("Found VPC with id '%s'", vpc_id)

        resolved = {}
        if spec.subnets is not None:
            subnet_ids = []
            for query in spec.subnets:
                subnet_ids.extend(self.get_subnet_ids(vpc_id, query))
            resolved["subnet_ids"] = _unique(subnet_ids)

        if spec.security_groups is not None:
            group_ids = []
            for query in spec.security_groups:
                group_ids.extend(self.get_security_group_ids(vpc_id, query))
            resolved["security_group_ids"] = _unique(group_ids)

        return ResolvedNetwork(**resolved)
