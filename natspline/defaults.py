# Polynomial degree used by fit when none is given.
degree = 3

# Relative residual at which the iterative solver stops.
tolerance = 1e-5

# Upper bound on solver steps; guarantees termination.
max_iterations = 1000

# Krylov method used by the default backend: gmres, bicgstab or lgmres.
method = "gmres"

# GMRES restart length. None restarts after a full sweep of the system.
restart = None

# Number of samples drawn by the plot command.
plot_points = 200
