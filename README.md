# elderframe

A pure-Python library of numerical building blocks for hierarchical
(Elder / Mentor / Erudite) systems: entropy measures, tensor algebra, loss
functions, field and orbital models, and line diffs of text. It needs
nothing beyond the standard library.

## Modules

- `elderframe.tensor_entropy`: `EntropyTensor` reads its flat `data` as an
  unnormalised distribution. It gives `entropy`, `joint_entropy`,
  `conditional_entropy`, `mutual_information`, `kl_divergence` (infinite when
  a side sums to zero) and an in-place `normalize`. `InformationTensor` wraps
  one and adds `information_content`, `channel_capacity`,
  `compression_ratio` and `estimate_complexity`.
- `elderframe.tensor_algebra`: `TensorAlgebra` with `tensor_product`,
  `inner_product` (through its Euclidean metric), `cross_product` (3-vectors
  only, `ValueError` otherwise), `trace`, `determinant`, `transpose` and
  `matrix_multiply`. `TensorOperator.apply` runs the named operations
  `add`, `multiply`, `contract`, `outer` and `transform` (tanh), raising
  `KeyError` for an unknown name and `ValueError` for too few tensors; it
  also has `norm` and `normalize`. `GravitationalTensor` and
  `HeliomorphicTensor` carry shapes and zero-filled tensors.
- `elderframe.hierarchical_tensor`: `HierarchicalTensor` holds
  `LevelTensor`s by level; `establish_hierarchy` links parent and child,
  `propagate_down` adds a tenth of a parent into its children,
  `propagate_up` averages a child into its parent, and `level_entropy`
  gives a mean entropy measure per level. `ElderTensorOperations` applies
  the `coordination`, `supervision`, `aggregation` and `synthesis`
  operations between the elder (0), mentor (1) and erudite (2) levels.
- `elderframe.serialization`: `ElderSerializer` writes data inside a JSON
  envelope (`type`, `version`, `timestamp`, `metadata`, `data`) to a binary
  stream or file and reads the data back. The `"json"` format is indented,
  `"binary"` is compact JSON; any other name behaves as `"json"`.
- `elderframe.file_validation`: `FileValidator` runs rules (file exists,
  size limit, allowed extension as a warning, plus any added with
  `add_rule`) and returns a `ValidationResult` with errors, warnings and a
  SHA-256 checksum. `store_checksum` and `verify_integrity` track files over
  time.
- `elderframe.losses`: `ElderLossFunction`, a weighted `"mse"` or `"mae"`.
- `elderframe.hierarchical_loss`: `CrossLevelLoss`, `ElderMentorLoss` and
  `MentorEruditeLoss`, each a weighted sum of four terms over the states of
  the levels.
- `elderframe.optimization_loss`: `ConvergenceLoss` (with `is_converged`
  and `convergence_rate`) and `StabilityLoss`, both keeping a history of
  what they are given.
- `elderframe.diff_analysis`: `compute_changes` lists keys of a target
  mapping that are added or modified against a source. `DiffAnalyzer`
  classifies the lines of two texts as additions, deletions or unchanged by
  the `"myers"`, `"patience"` or `"histogram"` algorithm, with optional case
  folding and space stripping, and gives a line `similarity` and
  `distance`; `edit_distance` is the Levenshtein distance by character.
- `elderframe.diff_visualization`: `DiffVisualizer.visualize` compares two
  texts position by position into a unified or side-by-side `VisualDiff`;
  `render` turns it into text with optional line numbers and ANSI colours.
- `elderframe.field_entropy`: `FieldEntropyCalculator` bins sampled fields
  to a tolerance and gives `entropy`, `relative_entropy` and
  `mutual_information`.
- `elderframe.gravitational`: `Vector3D`, `FieldGenerator`,
  `EigenvalueCalculator` (`eigenvalue`, `spectrum`, `dominant`),
  `FieldPhaseCoupling`, `StabilityAnalyzer` and
  `GravitationalStratification`.
- `elderframe.phase_fields`: `PhaseFieldSystem` of oscillating
  `PhaseField`s with `evolve` and `coherence`; `CouplingMatrix` with
  `coupled_evolution` and `coupling_energy`.
- `elderframe.field_memory`: `FieldBasedStorage` (capacity charged by
  compressed size), `GravitationalMemoryField` (recall by distance and
  weight, exponential decay, eviction of the oldest),
  `InfiniteMemorySystem` (layers of doubling capacity; `store` returns the
  layer used) and `MemoryRetrieval` (keyword index, results ranked by
  weight).
- `elderframe.orbital`: `OrbitalMechanics.orbital_period`,
  `ConservationLaws` for energy and angular momentum, `PerturbationAnalyzer`,
  `ResonanceAnalyzer` for simple period ratios, and `TrajectoryCalculator`
  for constant-velocity propagation.

## Installing

```
pip install .
```

## Example

```python
from elderframe.tensor_algebra import TensorAlgebra
from elderframe.diff_analysis import DiffAnalyzer

algebra = TensorAlgebra(3)
print(algebra.determinant([[1.0, 2.0], [3.0, 4.0]]))      # -2.0
print(algebra.cross_product([1.0, 0.0, 0.0], [0.0, 1.0, 0.0]))  # [0.0, 0.0, 1.0]

analyzer = DiffAnalyzer()
print(analyzer.edit_distance("kitten", "sitting"))  # 3
```

## What it does not do

- It is a library only: there is no command-line program, and nothing runs
  simulations, trains models or writes reports on its own.
- `ElderSerializer` neither compresses nor encrypts; its `compression` and
  `encryption` attributes are flags only.
- The memory classes keep everything in process memory; nothing is saved to
  disk.

## Running the tests

```
pip install .[test]
pytest
```