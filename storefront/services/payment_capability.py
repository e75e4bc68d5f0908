from typing import Protocol

DEFAULT_NETWORKS: tuple[str, ...] = ("visa", "masterCard", "amex")


class PaymentCapability(Protocol):
    """
    Answers "can this device pay with a wallet right now?".

    Implementations may change their answer at any time; callers must ask
    again instead of caching the result.
    """

    def can_make_payments(self) -> bool: ...

    def can_make_payments_with_networks(
        self, networks: tuple[str, ...] = DEFAULT_NETWORKS
    ) -> bool: ...


class SimulatedDeviceCapability:
    """
    Settings-driven stand-in for the device wallet.

    `enabled` mirrors whether a wallet exists at all; `networks` lists the
    card networks provisioned in it.
    """

    def __init__(self, enabled: bool = True, networks: list[str] | None = None):
        self.enabled = enabled
        self.networks = set(networks if networks is not None else DEFAULT_NETWORKS)

    def can_make_payments(self) -> bool:
        return self.enabled

    def can_make_payments_with_networks(
        self, networks: tuple[str, ...] = DEFAULT_NETWORKS
    ) -> bool:
        if not self.enabled:
            return False
        return any(network in self.networks for network in networks)
