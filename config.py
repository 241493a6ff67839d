"""
Configuration for Tabular Q-Learning on the Can World
=====================================================
"""

# Environment Configuration
ENV_CONFIG = {
    "dimension": 10,               # 10x10 grid
    "n_cans": 20,                  # Cans scattered per episode
    "steps_per_episode": 200,      # Fixed episode length
}

# Q-Learning Hyperparameters
AGENT_CONFIG = {
    "eta": 0.2,                    # Learning rate
    "gamma": 0.9,                  # Discount factor
    "epsilon": 1.0,                # Initial exploration rate
    "epsilon_min": 0.1,            # Floor for decaying schedules
    "epsilon_decay": 0.99,         # Per-episode factor (exponential schedule)
    "epsilon_schedule": "linear",  # linear | exponential | constant
    "eps_decay_episodes": 80,      # Episodes to reach epsilon_min (linear schedule)
}

# Training Configuration
TRAIN_CONFIG = {
    "n_episodes": 100,             # Total training episodes
    "log_interval": 10,            # Print stats every N episodes
    "eval_episodes": 10,           # Greedy episodes after training (0 disables)
    "seed": None,                  # None = nondeterministic
}

# Paths
PATHS = {
    "output_dir": "./outputs",
    "logs_dir": "./logs",
    "q_table_file": "./outputs/q_table.csv",
    "episodes_file": "./outputs/episodes.csv",
    "plot_file": "./logs/training_stats.png",
}
