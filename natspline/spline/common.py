'''Polynomial helpers shared by the assembler and evaluator.

Coefficients are stored in ascending order, ``c[k]`` multiplying ``t**k``.
'''
from math import comb, perm


def permutations(k, order):
    'Number of ordered selections of :order: items out of :k:.'
    if order > k:
        return 0
    return perm(k, order)


def binomial(j, l):
    return comb(j, l)


def polyval(c, t):
    ret = 0.
    for i in range(len(c) - 1, -1, -1):
        ret = ret * t + c[i]
    return ret


def polyder_eval(c, t, order):
    '''
    Evaluate the :order:-th derivative (with respect to :t:) of the
    polynomial with coefficients :c: at :t:.
    '''
    if order < 0:
        raise ValueError("derivative order must be non-negative")
    ret = 0.
    for k in range(len(c) - 1, order - 1, -1):
        ret = ret * t + c[k] * permutations(k, order)
    return ret


def polyint(c, lo, hi):
    'Definite integral of the polynomial :c: over [lo, hi].'
    def F(t):
        ret = 0.
        for k in range(len(c) - 1, -1, -1):
            ret = ret * t + c[k] / (k + 1)
        return ret * t
    return F(hi) - F(lo)
