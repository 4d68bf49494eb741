"""API response types for the IDCloudHost REST API.

Pydantic models representing the JSON returned by the API. Every field has
a default so that partial or evolving payloads still validate; unknown
fields are ignored.
"""

from pydantic import BaseModel


class Disk(BaseModel):
    """Block storage disk. Sizes are in GB."""

    # Core identification
    id: int = 0
    uuid: str = ""
    name: str = ""

    # Capacity and placement
    size: int = 0
    pool: str = ""
    status: str = ""

    # Ownership
    user_id: int = 0
    billing_account_id: int = 0

    # UUID of the virtual machine the disk is attached to, if any
    attached_to: str | None = None

    created_at: str = ""
    updated_at: str = ""


class VmStorage(BaseModel):
    """Disk as listed inside a virtual machine description."""

    uuid: str = ""
    name: str = ""
    size: int = 0
    primary: bool = False
    pool: str = ""


class VirtualMachine(BaseModel):
    """Virtual machine. Memory is in MB."""

    # Core identification
    uuid: str = ""
    name: str = ""
    hostname: str = ""

    # State information
    status: str = ""

    # Sizing
    vcpu: int = 0
    memory: int = 0

    # Operating system
    os_name: str = ""
    os_version: str = ""

    # Networking and storage
    private_ipv4: str = ""
    storage: list[VmStorage] | None = None

    # Ownership
    user_id: int = 0
    billing_account: int = 0

    created_at: str = ""
    updated_at: str = ""


class BillingAccount(BaseModel):
    """Billing account that resources are charged to."""

    id: int = 0
    display_name: str = ""
    email: str = ""
    is_default: bool = False
    is_active: bool = True


class OperationResult(BaseModel):
    """Acknowledgement returned by delete style endpoints."""

    success: bool = False
