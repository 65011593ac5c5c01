"""Quick Start Example

Computes psi between three synthetic pollen cores, first as a long table,
then as a square matrix.
"""

import logging

import numpy as np
import pandas as pd

from seqpsi import workflow_psi

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

rng = np.random.default_rng(42)

# Three cores of taxon proportions sampled at different depths
rows = []
for core, n_samples, shift in [("lake", 20, 0.0), ("bog", 14, 0.05), ("fen", 17, 0.4)]:
    trend = np.clip(np.linspace(0.1, 0.9, n_samples) + shift, 0.0, 1.0)
    for k in range(n_samples):
        props = np.array([1.0 - trend[k], trend[k], 0.2]) + rng.uniform(0, 0.05, 3)
        props /= props.sum()
        rows.append({"core": core, "depth": 2.0 * k,
                     "pinus": props[0], "quercus": props[1], "poaceae": props[2]})
df = pd.DataFrame(rows)

logger.info("Psi table (manhattan, no diagonal)")
table = workflow_psi(df, group_col="core", time_col="depth", method="manhattan")
logger.info("%s\n", table.to_string(index=False))

logger.info("Psi matrix (hellinger, diagonal)")
matrix = workflow_psi(df, group_col="core", time_col="depth",
                      method="hellinger", diagonal=True, output="matrix")
logger.info("%s", matrix.round(3).to_string())
