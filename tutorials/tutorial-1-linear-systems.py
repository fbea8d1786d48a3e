#!/usr/bin/env python
# coding: utf-8

# # PyDataDriven

# ## Tutorial 1: Estimating linear systems from data

# In this tutorial we estimate the linear operator driving a small system from its sampled trajectory, first in discrete time, then in continuous time and finally with a control input.

# In[1]:


import matplotlib.pyplot as plt
import numpy as np
from scipy.integrate import solve_ivp

from pydatadriven import (
    DMDPINV,
    DMDSVD,
    TOTALDMD,
    DataDrivenProblem,
    FbDMD,
    metrics,
    result,
    solve,
)
from pydatadriven.plotter import plot_eigs, plot_trajectory


# We sample the discrete system $\mathbf{x}_{k+1} = \mathbf{A}\mathbf{x}_k$ and perturb the measurements with some noise.

# In[2]:


A = np.array([[1.0, 1.0], [-1.0, 2.0]]) / np.sqrt(3)
X = np.zeros((2, 100))
X[:, 0] = [0.5, 1.0]
for k in range(1, 100):
    X[:, k] = A.dot(X[:, k - 1])
X += np.random.normal(0.0, 1e-2, X.shape)

problem = DataDrivenProblem.discrete(X)


# Every estimator is passed to `solve`, which returns the estimated operator, the reconstructed trajectory and some accuracy metrics.

# In[3]:


for algorithm in [DMDPINV(), DMDSVD(), TOTALDMD(), FbDMD()]:
    solution = solve(problem, algorithm)
    print(algorithm, np.abs(solution.estimation.eigenvalues))
    print(result(solution))
    print("L2 error:", metrics(solution)["L2_total"])


# The eigenvalues of the true operator lie on the unit circle: the total least squares and the forward/backward variants are less affected by the noise.

# In[4]:


solution = solve(problem, FbDMD())
plot_eigs(solution, title="Forward/backward DMD")
plot_trajectory(solution)


# Continuous problems need the time derivatives of the states: here we obtain them from the right-hand side of the system integrated by `solve_ivp`.

# In[5]:


Ac = np.array([[-0.9, 0.1], [0.0, -0.2]])


def f(t, x):
    return Ac.dot(x)


ivp = solve_ivp(f, (0.0, 10.0), [10.0, -20.0],
                t_eval=np.linspace(0.0, 10.0, 1001), rtol=1e-10, atol=1e-12)
problem = DataDrivenProblem.from_ivp(ivp, f)

solution = solve(problem, DMDSVD())
print(result(solution))
plot_eigs(solution, title="Continuous DMD")


# Finally, the control input is passed to the problem: the estimated control matrix is returned along with the state operator.

# In[6]:


B = np.array([[1.0], [0.5]])
U = np.random.rand(1, 30) - 0.5
X = np.zeros((2, 30))
X[:, 0] = [1.0, -1.0]
for k in range(1, 30):
    X[:, k] = A.dot(X[:, k - 1]) + B.dot(U[:, k - 1])

problem = DataDrivenProblem.discrete(X, U=U)
estimation = solve(problem, DMDSVD(), operator_only=True)
print(estimation.K)
print(estimation.B)

plt.show()
