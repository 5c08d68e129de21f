"""Building blocks: neuron models and synapse/plasticity models."""
