"""Neural network brain configuration constants.

Architecture:
    Input (5): front, left, right sensors, food eaten, energy
    Hidden: 16 -> 16 (relu)
    Output (4): up, down, left, right (linear)
"""

BRAIN_INPUT_SIZE = 5
BRAIN_OUTPUT_SIZE = 4
NETWORK_SHAPE = (BRAIN_INPUT_SIZE, 16, 16, BRAIN_OUTPUT_SIZE)

HIDDEN_ACTIVATION = "relu"
HIDDEN_DROPOUT = 0.0
ACTIVATION_ALPHA = 0.01  # Leak for leaky-relu, scale for elu

# Defaults for NeuralNetwork.mutate() when called without arguments
DEFAULT_MUTATION_RATE = 0.1
DEFAULT_MUTATION_SCALE = 0.2
