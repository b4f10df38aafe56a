import numpy as np
import plotly.graph_objects as go

from twopoint.motion import AccSolver, JerkSolver
from twopoint.motion.utils import sample_profile, plot_profiles, step_delays
from twopoint.utils.log_utils import init_logger


init_logger(log_file=None)

full_steps_per_rev = 200
microstep_factor = 2
step_angle = 360.0 / (full_steps_per_rev * microstep_factor)  # deg

# Rotation of 720 deg with either profile type.
acc_profile = AccSolver.create(
    p0=0.0,
    pe=720.0,
    a_max=1500.0,  # deg / s2
    d_max=3000.0,  # deg / s2
    v_max=720.0    # deg / s
)
jerk_profile = JerkSolver.create(
    p0=0.0,
    pe=720.0,
    a_max=1500.0,   # deg / s2
    v_max=720.0,    # deg / s
    j_max=15000.0   # deg / s3
)
print(f"trapezoidal profile: {acc_profile.total_time:.3f} s ({acc_profile.case.name})")
print(f"S-curve profile: {jerk_profile.total_time:.3f} s ({jerk_profile.case.name})")


# Position, velocity, and acceleration timing profiles.
plot_profiles(sample_profile(acc_profile, 0.001), title="trapezoidal profile").show()
plot_profiles(sample_profile(jerk_profile, 0.001), title="S-curve profile").show()


# Time delays between the step pulses to the driver.
fig = go.Figure()
for name, profile in (("trapezoidal", acc_profile), ("S-curve", jerk_profile)):
    delays = step_delays(profile, step_angle)
    fig.add_trace(go.Scatter(x=np.arange(len(delays)), y=delays, mode="lines", name=name))
fig.update_layout(xaxis_title="step", yaxis_title="pulse delay, s")
fig.show()
