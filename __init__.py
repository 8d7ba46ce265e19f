"""
igsplit

Information gain split search for decision tree and forest training.

OptIgSplit scores one attribute of one node: categorical attributes by the
gain of a multiway split, numerical attributes by the best ``< threshold``
cut found with an incremental label-histogram sweep. DefaultIgSplit is the
histogram-rebuilding reference, and SplitEvaluator selects and cross-checks
the two.
"""
