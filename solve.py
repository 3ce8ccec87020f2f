"""
N-Queens Step-by-Step Visualizer
================================

Thin launcher for the terminal front end in ``nqviz.frontend.cli``.

Examples
--------
    python solve.py --size 6                      # animate the first solution
    python solve.py -n 8 --mode all --delay 0     # enumerate all 92 solutions
    python solve.py -n 8 --mode all --csv --plots --gif results_nqviz/search.gif
    python solve.py --effort 10                   # effort chart for N=1..10
    python solve.py --config config.json --quick-test

Ctrl-C stops the running search; Ctrl-\\ skips the remaining animation.
"""

from nqviz.frontend.cli import main


if __name__ == "__main__":
    main()
