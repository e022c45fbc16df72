"""Names of the values written into an ``Instance``."""

X_NODE_FEATURE_NAME = "node_feature"
X_NEIGH_FEATURE_NAME = "neigh_feature"
X_SELF_BLOCK_NAME = "self_block"
X_NEIGH_BLOCK_NAME = "neigh_block"
X_SRC_ID_NAME = "src_id"
X_DST_ID_NAME = "dst_id"
X_PREDICT_NODE_NAME = "predict_node"
Y_NAME = "Y"

# Encoder suffixes for the per-type feature and block names.
USER_ENCODER_NAME = "USER_ENCODER_NAME"
ITEM_ENCODER_NAME = "ITEM_ENCODER_NAME"


def encoder_key(base: str, encoder_name: str) -> str:
    return base + encoder_name
