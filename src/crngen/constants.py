"""Shared constants for network generation and file handling."""

SPECIES_PREFIX = "A_"

# Consecutive rejections allowed per sampled edge slot.
REJECTION_FACTOR = 10

JRNF_MAGIC = "jrnf0003"

DEFAULT_OUTPUT = {
    "create_ER_NM": "ER_NM_network.jrnf",
    "create_ER_NM_bi_C": "bi_nMC_network.jrnf",
    "create_BA_NM": "BA_NM_network.jrnf",
    "create_BA_NM_bi_C": "bi_NMC_network.jrnf",
    "create_WS_NMalpha": "WS_NMalpha_network.jrnf",
    "create_WS_NMalpha_bi_C": "bi_NMalphaC_network.jrnf",
    "create_PS_NMhmr": "PS_NMhmr_network.jrnf",
    "create_PS_NMhmr_bi_C": "PS_NMhmr_bi_C_network.jrnf",
    "create_SM_NMmr_bi_C": "SM_NMmr_bi_C_network.jrnf",
}
