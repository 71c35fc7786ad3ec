"""
Team registry demonstration.

Seeds the registry table with two fixed team records and exercises every
registry operation against it:

1. Load the store credentials from the secrets store
2. Create both teams (skipped when they already exist)
3. Read both records back
4. List all team names
5. Look up the owners of two DNS records, and of one nobody owns
6. Append a DNS record to one team and read it again

Run with ``python -m team_registry`` or ``team-registry-demo``.
"""

import logging
import sys
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .config import RegistryConfig
from .core import load_store_credentials
from .exceptions import RecordNotFoundError, TeamRegistryError
from .handlers import TeamAssetsReadApi, TeamAssetsWriteApi
from .models import TeamAssets

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(filename)s:%(lineno)d: %(message)s"
LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

MARS_VOLTA = TeamAssets(
    team_name="marsVolta",
    dns_records=["deloused.in.the.comatorium", "bedlam.in.goliath"],
    health_checks=["eriatarka", "wax.simulacra"],
)

KARNIVOOL = TeamAssets(
    team_name="karnivool",
    dns_records=["sound.awake", "themata"],
    health_checks=["simple.boy", "shutterspeed"],
)

LOOKUP_RECORDS = ["sound.awake", "themata"]
UNREGISTERED_RECORD = "nope"
ADDED_RECORD = "t2r3"


class DemoReport(BaseModel):
    """Everything the demonstration read from the registry."""

    assets: List[TeamAssets] = Field(default_factory=list)
    keys: List[str] = Field(default_factory=list)
    owners: Dict[str, str] = Field(default_factory=dict)
    missing_record_error: Optional[str] = None
    updated: Optional[TeamAssets] = None


def configure_logging(config: RegistryConfig) -> None:
    """Send log records to stdout with microsecond timestamps and source lines."""
    logging.basicConfig(
        level=logging.DEBUG if config.enable_debug_logging else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )


def run_demo(read_api: TeamAssetsReadApi, write_api: TeamAssetsWriteApi) -> DemoReport:
    """Run the demonstration flow against the given APIs.

    Any registry error propagates to the caller, except the lookup of the
    unregistered record, whose RecordNotFoundError is expected and reported.

    Returns:
        DemoReport with the values read at each step
    """
    report = DemoReport()

    # populate
    write_api.populate_datastore(MARS_VOLTA)
    write_api.populate_datastore(KARNIVOOL)

    # get assets
    report.assets = [
        read_api.get_asset(KARNIVOOL.team_name),
        read_api.get_asset(MARS_VOLTA.team_name),
    ]
    print("all assets: ", *report.assets)

    # get all name keys
    report.keys = read_api.get_all_keys()
    print("all owners: ", report.keys)

    # get specific key owner
    for record in LOOKUP_RECORDS:
        report.owners[record] = read_api.get_record_team(record)
        print(report.owners[record])

    try:
        read_api.get_record_team(UNREGISTERED_RECORD)
    except RecordNotFoundError as e:
        report.missing_record_error = str(e)
        logger.info(f"Expected lookup failure: {e}")
        print(e.message)

    # update team asset
    updated = KARNIVOOL.model_copy(update={'dns_records': KARNIVOOL.dns_records + [ADDED_RECORD]})
    write_api.update_team_assets(KARNIVOOL.team_name, updated)

    report.updated = read_api.get_asset(KARNIVOOL.team_name)
    print("updated karnivool assets: ", report.updated)

    return report


def main() -> int:
    """Load credentials, open the registry and run the demonstration.

    Returns:
        Process exit status: 0 on success, 1 on any registry error
    """
    config = RegistryConfig.from_env()
    configure_logging(config)

    try:
        credentials = load_store_credentials(config)
        logger.info(f"Loaded store credentials from {config.secret_base_path}")

        store_config = config.with_credentials(credentials)
        read_api = TeamAssetsReadApi(store_config)
        write_api = TeamAssetsWriteApi(store_config)
        logger.info(f"Using registry table {read_api.gateway.table_name}")

        run_demo(read_api, write_api)
    except TeamRegistryError as e:
        logger.error(f"error: {e}")
        return 1

    return 0
