"""Node and network configuration of the peer-to-peer node around the scheme.

Nothing in the encryption core reads this module. Callers use it to apply
the network's message size policy before handing a plaintext to
`algos.encrypt`.

Examples
--------
>>> from groupenc import environment
>>> env = environment.client()
>>> env.default_node_port
4132
"""

from dataclasses import dataclass
from enum import IntEnum

from groupenc.objects import HEADER_SIZE

# testnet2
DEFAULT_NETWORK_ID = 2


class NodeType(IntEnum):
    CLIENT = 0  # full node, sends and receives blocks
    MINER = 1  # full node, produces blocks
    PEER = 2  # discovery node, shares peers
    SYNC = 3  # discovery node, syncs other nodes


@dataclass(frozen=True)
class Environment:
    """Static parameters of one kind of node.

    Attributes
    ----------
    node_type : NodeType
    minimum_number_of_peers : int
    network_id : int
        added to the base ports
    message_version : int
        bumped to force users to update
    heartbeat_in_secs, connection_timeout_in_secs, ping_sleep_in_secs,
    radio_silence_in_secs, failure_expiry_time_in_secs : int
        peer timing; the connection timeout must not exceed the heartbeat
    maximum_message_size : int
        largest message the network transmits, in bytes
    """

    node_type: NodeType
    minimum_number_of_peers: int
    network_id: int = DEFAULT_NETWORK_ID
    message_version: int = 5
    coinbase_is_public: bool = False
    fast_sync: bool = True
    peer_nodes: tuple = ()
    sync_nodes: tuple = ("127.0.0.1:4132", "127.0.0.1:4135")
    heartbeat_in_secs: int = 10
    connection_timeout_in_secs: int = 3
    ping_sleep_in_secs: int = 12
    radio_silence_in_secs: int = 120  # 2 minutes
    failure_expiry_time_in_secs: int = 7200  # 2 hours
    maximum_number_of_peers: int = 21
    maximum_connection_failures: int = 5
    maximum_candidate_peers: int = 10000
    maximum_message_size: int = 128 * 1024 * 1024  # 128 MiB
    maximum_block_request: int = 100
    maximum_number_of_failures: int = 2400

    def __post_init__(self):
        if self.connection_timeout_in_secs > self.heartbeat_in_secs:
            raise ValueError("connection timeout must not exceed the heartbeat interval")
        if self.minimum_number_of_peers > self.maximum_number_of_peers:
            raise ValueError("minimum number of peers exceeds the maximum")

    @property
    def default_node_port(self):
        return 4130 + self.network_id

    @property
    def default_rpc_port(self):
        return 3030 + self.network_id


TRIAL_SYNC_NODES = ("144.126.219.193:4132", "165.232.145.194:4132")


def client(**overrides):
    return Environment(NodeType.CLIENT, minimum_number_of_peers=2, **overrides)


def miner(**overrides):
    return Environment(NodeType.MINER, minimum_number_of_peers=1,
                       coinbase_is_public=True, **overrides)


def sync_node(**overrides):
    return Environment(NodeType.SYNC, minimum_number_of_peers=5,
                       maximum_number_of_peers=1024, **overrides)


def client_trial(**overrides):
    return Environment(NodeType.CLIENT, minimum_number_of_peers=5,
                       sync_nodes=TRIAL_SYNC_NODES, **overrides)


def miner_trial(**overrides):
    return Environment(NodeType.MINER, minimum_number_of_peers=5,
                       sync_nodes=TRIAL_SYNC_NODES, coinbase_is_public=True, **overrides)


def max_plaintext_length(env, group):
    """Largest plaintext length whose encoded ciphertext fits one message."""
    slots = (env.maximum_message_size - HEADER_SIZE) // group.element_size
    return max(0, slots - 1)


def check_plaintext_length(env, group, plaintext):
    """Raise `ValueError` if `plaintext` would not fit in one network message."""
    limit = max_plaintext_length(env, group)
    if len(plaintext) > limit:
        raise ValueError("plaintext of {} elements exceeds the limit of {} for {}".format(
            len(plaintext), limit, group.name))
