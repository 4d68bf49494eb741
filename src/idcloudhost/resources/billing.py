"""Billing account client."""

import structlog

from .. import restapi
from ..restapi.types import BillingAccount

logger = structlog.get_logger(__name__)

BILLING_ACCOUNTS_PATH = "/v1/payment/billing_account/list"


class BillingClient:
    """Wrapper around the billing account endpoints."""

    def __init__(self, api: restapi.Client):
        self.api = api

    def list_billing_accounts(self, ctx: restapi.Context) -> list[BillingAccount]:
        """List the billing accounts of the user."""
        cfg = restapi.RequestConfig(method="GET", path=BILLING_ACCOUNTS_PATH)
        return restapi.decode(self.api.form_request(ctx, cfg), list[BillingAccount])

    def get_default_billing_account(self, ctx: restapi.Context) -> BillingAccount:
        """Return the billing account new resources are charged to by default.

        Raises:
            NotFoundError: If no account is flagged as default.
        """
        for account in self.list_billing_accounts(ctx):
            if account.is_default:
                return account
        logger.warning("No default billing account found")
        msg = "no default billing account"
        raise restapi.NotFoundError(msg)
