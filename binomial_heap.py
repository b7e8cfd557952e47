'''
    An implementation of binomial heaps, a mergeable priority queue.

    A heap is a forest of binomial trees stored in a root list ordered by
    increasing rank, with at most one tree of each rank. Push, pop and
    merge all reduce to merging two root lists, where two trees of equal
    rank are linked into a tree of rank + 1 that ripples onwards like the
    carry in binary addition.

    A comprehensive set of assertions check the structural integrity of
    the forest during execution, and heap.validate() checks all of it.
'''


import heapq
import random
import sys
import time


class Heap:
    '''Binomial heaps - A mergeable priority queue of single values.

    The class supports the following operations:

      - Heap(ordering, pool) creates and returns an empty heap. The
        ordering is Heap.MIN (smallest value first, the default) or
        Heap.MAX (largest value first), fixed for the lifetime of the heap.
      - H.is_empty() returns if the heap H is empty.
      - len(H) returns the number of values in H.
      - H.push(value) inserts value into H.
      - H.peek() returns the first value of H, None if H is empty.
      - H.pop() removes and returns the first value of H, None if empty.
      - H1.merge(H2) moves all values of H2 into H1 and returns H1.
        H2 is left empty.

    Push, pop, peek and merge take worst-case O(log n) time. len(H) is
    recomputed from the ranks of the roots in O(log n) time, is_empty()
    takes O(1) time.

    When two trees with equal values at their roots are linked, the tree
    from the left forest becomes the parent. In H1.merge(H2) the left
    forest is H1, in pop it is the remaining roots of the heap.

    If a NodePool is given, nodes removed by pop are recycled by later
    pushes instead of allocating new nodes.
    '''

    MIN = 0
    MAX = 1

    def __init__(self, ordering=MIN, pool=None):
        '''Initialize a new empty heap.'''

        assert ordering in (Heap.MIN, Heap.MAX)

        self._ordering = ordering
        self._pool = pool
        self._roots = []  # ordered by increasing rank

    def __len__(self):
        '''Return number of values, a tree of rank r holds 2^r values.'''

        return sum(root.size() for root in self._roots)

    def __bool__(self):
        return not self.is_empty()

    def __repr__(self):
        name = 'MIN' if self._ordering == Heap.MIN else 'MAX'
        return f'Heap({name}, size={len(self)})'

    def __str__(self):
        '''Nested bracket notation of the forest, for debugging.'''

        return render_forest(self._roots)

    def ordering(self):
        '''Return Heap.MIN or Heap.MAX.'''

        return self._ordering

    def is_empty(self):
        '''Return if heap is empty.'''

        return not self._roots

    def dominates(self, a, b):
        '''Return if value a can be the parent of value b (ties allowed).'''

        if self._ordering == Heap.MIN:
            return not b < a
        return not a < b

    def push(self, value):
        '''Insert value into the heap.'''

        assert value is not None  # None is reserved for absent results

        if self._pool is not None:
            node = self._pool.acquire(value)
        else:
            node = Node(value)
        node.attach()
        self._roots = self.merge_forests(self._roots, [node])

    def peek(self):
        '''Return the first value without removing it. None if empty.'''

        index = self.first_root()
        if index is None:
            return None
        return self._roots[index].value()

    def pop(self):
        '''Remove and return the first value. None if empty.'''

        index = self.first_root()
        if index is None:
            return None

        node = self._roots.pop(index)
        children = node.detach_children()  # ranks 0, ..., rank - 1
        self._roots = self.merge_forests(self._roots, children)
        node.detach()
        value = node.value()
        if self._pool is not None:
            self._pool.release(node)
        return value

    def merge(self, other):
        '''Move all values of other into this heap. Returns this heap.'''

        assert other is not self
        assert other.ordering() == self.ordering()

        self._roots = self.merge_forests(self._roots, other._roots)

        assert other.is_empty()

        return self

    def first_root(self):
        '''Index of the root holding the first value. None if empty.

        Among equal values the root with the smallest rank is chosen.
        '''

        roots = self._roots
        best = None
        for i, root in enumerate(roots):
            if best is None or not self.dominates(roots[best]._value,
                                                  root._value):
                best = i
        return best

    def all_nodes(self):
        '''Generator to yield all nodes in the forest.'''

        for root in self._roots:
            yield from root.all_nodes()

    ##################################################################
    #                        Linking and merging
    ##################################################################

    def link(self, x, y):
        '''Link two trees of equal rank. Return the winner (parent of the other).

        On equal values x wins.
        '''

        assert x is not y
        assert x._rank == y._rank

        if self.dominates(x._value, y._value):
            x.add_child(y)
            return x
        else:
            y.add_child(x)
            return y

    def merge_forests(self, left, right):
        '''Merge two root lists into a new root list and return it.

        Both lists must be ordered by increasing rank with distinct ranks,
        and both are emptied. The lists are scanned from the smallest rank.
        The head of smaller rank is moved to the result, and two heads of
        equal rank r are linked into a carry of rank r + 1 that replaces
        the head of one of the lists. If both lists already have a head of
        rank r + 1 the carry goes directly to the result.
        '''

        assert is_forest(left)
        assert is_forest(right)
        assert left is not right

        # Stacks with smallest rank on top
        xs = left[::-1]
        ys = right[::-1]
        left.clear()
        right.clear()

        roots = []
        while xs and ys:
            if xs[-1]._rank < ys[-1]._rank:
                roots.append(xs.pop())
            elif ys[-1]._rank < xs[-1]._rank:
                roots.append(ys.pop())
            else:
                carry = self.link(xs.pop(), ys.pop())
                if not xs or xs[-1]._rank != carry._rank:
                    xs.append(carry)
                elif not ys or ys[-1]._rank != carry._rank:
                    ys.append(carry)
                else:
                    roots.append(carry)
        roots.extend(reversed(xs or ys))

        assert is_forest(roots)

        return roots

    ##################################################################
    #                      Validation methods
    ##################################################################

    def validate(self):
        '''Validate all forest structure and invariants.'''

        seen = set()  # ids of nodes reached

        def validate_tree(node, parent=None):
            '''Recursive validate tree nodes.'''

            assert not node.retired()
            assert node.attached()
            # Each node has exactly one owner
            assert id(node) not in seen
            seen.add(id(node))
            # Validate heap order
            if parent is not None:
                assert self.dominates(parent._value, node._value)
            # Binomial tree shape, children have ranks 0, ..., rank - 1
            assert node._rank == len(node._children)
            assert node.height() == node._rank + 1
            assert [child._rank for child in node.children()] == \
                list(range(node._rank))
            for child in node.children():
                validate_tree(child, node)

        assert is_forest(self._roots)
        for root in self._roots:
            validate_tree(root)
        assert len(seen) == len(self)
        # Size has bit r set iff there is a root of rank r
        assert sum(1 << root._rank for root in self._roots) == len(seen)
        # Recycled nodes are not reachable
        if self._pool is not None:
            assert not any(id(node) in seen for node in self._pool.nodes())

    ##################################################################
    #                      Save forest as LaTeX
    ##################################################################

    def latex(self, filename='binomial_heap.tex', show_values=True):
        '''Save heap as a LaTeX figure using the forest package.

        The trees are drawn as children of an invisible root, each node
        showing its rank and, to its right, its value.
        '''

        assert not self.is_empty()

        def traverse(node, indent):
            '''Convert subtree rooted at node to LaTeX with indentation.'''

            value = str(node._value) if show_values else ''
            txt = ' ' * indent + r'[ \RANK{' + str(node._rank) + '}{'
            txt += value + '}'
            if not node._children:
                return txt + ' ]\n'
            txt += '\n'
            for child in node.children():
                txt += traverse(child, indent + 2)
            return txt + ' ' * indent + ']\n'

        trees = ''.join(traverse(root, 4) for root in self._roots)
        txt = r'''\documentclass[margin=15pt]{standalone}
\usepackage{forest}
\begin{document}
\forestset{binomial trees/.style={
    for tree={math content, draw, circle, minimum size=16pt,
      inner sep=0pt, outer sep=0cm, anchor=center, font=\scriptsize,
      l=25pt, s sep=20pt}
  }
}
\newcommand{\RANK}[2]{\makebox[0cm][c]{#1}\rlap{\hspace{1.5em}\tiny #2}}
\begin{forest}
  binomial trees
  [, phantom, for children={no edge}
''' + trees + r'''  ]
\end{forest}
\end{document}
'''
        with open(filename, 'w') as file:
            print(txt, file=file)


def is_forest(roots):
    '''Return if root list has strictly increasing ranks.'''

    return all(x._rank < y._rank for x, y in zip(roots, roots[1:]))


def render_forest(nodes):
    '''Return list of trees as [[v1 [[c1], [c2]]], [v2]].'''

    return '[' + ', '.join(str(node) for node in nodes) + ']'


######################################################################
#                           Node records
######################################################################


class Node:
    '''A binomial tree node storing a single value.'''

    def __init__(self, value):
        '''Create a rank zero node without children.'''

        self._value = value
        self._rank = 0
        self._children = []  # ordered by increasing rank
        self._attached = False  # owned by a forest or a parent

    def __str__(self):
        if not self._children:
            return f'[{self._value}]'
        return f'[{self._value} {render_forest(self._children)}]'

    def __repr__(self):
        return f'Node({self._value!r}, rank={self._rank})'

    def renew(self, value):
        '''Reuse a retired node as a rank zero node storing value.'''

        assert self.retired()

        self._value = value
        self._rank = 0

    def retire(self):
        '''Mark a detached node as no longer part of any heap.'''

        assert not self.retired()
        assert not self._attached
        assert not self._children

        self._value = None
        self._rank = None

    #######################################################
    # Methods for accessing the state of a node

    def value(self):
        '''Return the value stored in node.'''

        assert not self.retired()

        return self._value

    def rank(self):
        return self._rank

    def retired(self):
        '''Return if this node has been retired.'''

        return self._rank is None

    def attached(self):
        '''Return if node is a root of a heap or the child of a node.'''

        return self._attached

    def size(self):
        '''Number of nodes in subtree, 2^rank.'''

        return 1 << self._rank

    def children(self):
        '''Generator to return all children of node.'''

        yield from self._children

    def all_nodes(self):
        '''Generator to yield all nodes in subtree rooted at node.'''

        yield self
        for child in self._children:
            yield from child.all_nodes()

    def height(self):
        '''Return height of subtree rooted at node, equals rank + 1.'''

        return 1 + max((child.height() for child in self._children),
                       default=0)

    #######################################################
    # Methods for modifying the state of a node

    def add_child(self, child):
        '''Add child of equal rank as last child, increasing rank by one.'''

        assert child is not self
        assert not self.retired() and not child.retired()
        assert child._rank == self._rank
        assert self._attached and child._attached

        self._children.append(child)
        self._rank += 1

    def attach(self):
        '''Mark node as entering a forest.'''

        assert not self.retired()
        assert not self._attached

        self._attached = True

    def detach(self):
        '''Mark node, removed from its root list by pop, as owned by no one.'''

        assert self._attached
        assert not self._children

        self._attached = False

    def detach_children(self):
        '''Remove and return the list of children (a valid root list).'''

        children = self._children
        self._children = []
        return children


######################################################################
#                           Node pool
######################################################################


class NodePool:
    '''Free list of retired nodes that can be reused by push.

    A pool can be shared by several heaps. A node enters the pool when pop
    has removed its value, so pooled nodes are never reachable from a
    forest. Values are not kept alive by the pool.
    '''

    def __init__(self):
        self._free = []
        self._allocated = 0

    def __len__(self):
        '''Return number of nodes available for reuse.'''

        return len(self._free)

    def allocated(self):
        '''Return number of nodes ever created by this pool.'''

        return self._allocated

    def nodes(self):
        '''Generator to yield the nodes available for reuse.'''

        yield from self._free

    def acquire(self, value):
        '''Return a rank zero node storing value, reusing one if possible.'''

        if self._free:
            node = self._free.pop()
            node.renew(value)
        else:
            node = Node(value)
            self._allocated += 1
        return node

    def release(self, node):
        '''Retire a detached node and keep it for reuse.'''

        node.retire()
        self._free.append(node)


######################################################################
#                          Test methods
######################################################################


def swap(L, i, j):
    '''Swap entries L[i] and L[j].'''

    L[i], L[j] = L[j], L[i]


def pop_random(L):
    '''Remove a random element from L (by swapping with last element).'''

    swap(L, -1, random.randint(0, len(L) - 1))
    return L.pop()


def random_values(n, distinct=False):
    '''Returns a list of n random integer values.'''

    if distinct:
        return random.sample(range(1, 3 * n), n)
    else:
        return [random.randint(1, n) for _ in range(n)]


def sorted_values(values, ordering):
    '''Return values in the order a heap with ordering pops them.'''

    return sorted(values, reverse=ordering == Heap.MAX)


def pop_all(heap):
    '''Create list with all values from heap by calling n x pop.'''

    sequence = []
    while not heap.is_empty():
        first = heap.peek()
        heap.validate()
        value = heap.pop()
        assert value == first
        sequence.append(value)
        heap.validate()
    value = heap.pop()
    assert value is None
    assert heap.peek() is None
    assert len(heap) == 0
    heap.validate()
    return sequence


def test_sorting_push(n, ordering=Heap.MIN):
    '''Sort using n x push and n x pop.'''

    values = random_values(n)
    heap = Heap(ordering)
    heap.validate()
    # Create heap with n values
    for size, value in enumerate(values, 1):
        heap.push(value)
        heap.validate()
        assert len(heap) == size
    assert pop_all(heap) == sorted_values(values, ordering)


def test_sorting_merge(n, ordering=Heap.MIN):
    '''Sort using (n - 1) x merge in random order and n x pop.'''

    values = random_values(n)
    heaps = []
    # Create n heaps with one value
    for value in values:
        heap = Heap(ordering)
        heap.validate()
        heap.push(value)
        heap.validate()
        heaps.append(heap)
    # Repeatedly merge two random heaps until one heap remains
    while len(heaps) >= 2:
        heap1 = pop_random(heaps)
        heap2 = pop_random(heaps)
        size = len(heap1) + len(heap2)
        heap = heap1.merge(heap2)
        heap.validate()
        heap2.validate()
        assert heap2.is_empty()
        assert len(heap) == size
        heaps.append(heap)
    heap = heaps.pop()
    assert pop_all(heap) == sorted_values(values, ordering)


def test_sorting_pool(n, ordering=Heap.MIN):
    '''Sort twice through two heaps sharing a pool, reusing all nodes.'''

    pool = NodePool()
    heap1 = Heap(ordering, pool)
    heap2 = Heap(ordering, pool)
    for _ in range(2):
        values = random_values(n)
        for i, value in enumerate(values):
            (heap1 if i % 2 else heap2).push(value)
            heap1.validate()
            heap2.validate()
        heap1.merge(heap2)
        assert pop_all(heap1) == sorted_values(values, ordering)
        assert len(pool) == pool.allocated() == n


def test_sorting(n, repeats):
    '''Run all sorting tests for both orderings.'''

    print('Sorting n =', n, end=' ', flush=True)
    for _ in range(1, repeats + 1):
        print('.', end='', flush=True)
        for ordering in (Heap.MIN, Heap.MAX):
            test_sorting_push(n, ordering)
            test_sorting_merge(n, ordering)
            test_sorting_pool(n, ordering)
    print()


def test_random_operations(n, ordering=Heap.MIN):
    '''Test a random sequence of n heap operations against heapq.

    For Heap.MAX the heapq lists hold the negated values.
    '''

    sign = 1 if ordering == Heap.MIN else -1
    print(n, 'random heap operations ', end='', flush=True)
    heaps = []  # pairs (heap, heapq list with same values times sign)
    for iteration in range(1, n + 1):
        if iteration % 100 == 0:
            print('.', end='', flush=True)
        p = random.random()
        if len(heaps) == 0 or p < 0.05:  # new heap
            heap = Heap(ordering)
            heaps.append((heap, []))
            heap.validate()
        elif p < 0.15:  # merge
            if len(heaps) >= 2:
                heap1, S1 = pop_random(heaps)
                heap2, S2 = pop_random(heaps)
                heap = heap1.merge(heap2)
                assert heap2.is_empty()
                S = S1 + S2
                heapq.heapify(S)
                heaps.append((heap, S))
                heap.validate()
        elif p < 0.3:  # peek
            heap, S = random.choice(heaps)
            assert heap.peek() == (sign * S[0] if S else None)
        elif p < 0.7:  # push
            heap, S = random.choice(heaps)
            value = random.randint(1, 100)
            heap.push(value)
            heapq.heappush(S, sign * value)
            heap.validate()
        else:  # pop
            heap, S = random.choice(heaps)
            value = heap.pop()
            expected = sign * heapq.heappop(S) if S else None
            assert value == expected
            heap.validate()
        # Validate content of the heaps
        for heap, S in heaps:
            assert len(heap) == len(S)
            assert heap.is_empty() == (len(S) == 0)
            assert sorted(S) == sorted(sign * node.value()
                                      for node in heap.all_nodes())
    print(' final heap sizes:', *sorted(len(heap) for heap, S in heaps))


def selftest():
    '''Run the randomized tests for increasing values of n.'''

    test_sorting(1, 10)
    test_sorting(10, 100)
    test_sorting(100, 10)
    test_random_operations(10000)
    test_random_operations(10000, Heap.MAX)


######################################################################
#                            Benchmark
######################################################################


def benchmark(n=100, repeats=1000, seed=1234):
    '''Time sorting n random values with Heap and with heapq.

    Both sort largest value first. Returns seconds per sort by name.
    '''

    rng = random.Random(seed)
    values = [rng.randint(-2**31, 2**31 - 1) for _ in range(n)]
    expected = sorted(values, reverse=True)

    def sort_binomial():
        heap = Heap(Heap.MAX)
        for value in values:
            heap.push(value)
        result = []
        while not heap.is_empty():
            result.append(heap.pop())
        return result

    def sort_builtin():
        heap = []
        for value in values:
            heapq.heappush(heap, -value)
        return [-heapq.heappop(heap) for _ in range(len(heap))]

    timings = {}
    for name, sort in (('binomial', sort_binomial), ('builtin', sort_builtin)):
        print('Benchmark', name, end=' ', flush=True)
        start = time.perf_counter()
        for _ in range(repeats):
            result = sort()
            assert result == expected
        timings[name] = (time.perf_counter() - start) / repeats
        print(f'{timings[name] * 1e6:.1f} us per sort of {n} values')
    return timings


######################################################################
#                               Main
######################################################################


def parse_int(token):
    '''Parse a signed 32-bit decimal integer, ValueError otherwise.

    Unlike int(), surrounding whitespace, underscores and values out of
    range are rejected.
    '''

    digits = token[1:] if token[:1] in ('+', '-') else token
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f'invalid integer: {token!r}')
    value = int(token)
    if not -2**31 <= value < 2**31:
        raise ValueError(f'integer out of range: {token!r}')
    return value


def main(args=None):
    '''Push integer arguments onto a heap and print its size.

    Run like: python binomial_heap.py 6 5 4 3 2 1

    Flags: --verbose (-v) also prints the heap and its first value,
    --max pops largest values first, --selftest runs the randomized
    tests and --bench the benchmark.
    '''

    if args is None:
        args = sys.argv[1:]

    flags = {'-v': 'verbose', '--verbose': 'verbose', '--max': 'max',
             '--selftest': 'selftest', '--bench': 'bench'}
    options = {flags[arg] for arg in args if arg in flags}
    heap = Heap(Heap.MAX if 'max' in options else Heap.MIN)
    for arg in args:
        if arg in flags:
            continue
        try:
            value = parse_int(arg)
        except ValueError:
            print("can't parse arg:", arg)
            continue
        print('pushing:', value)
        heap.push(value)
    print('Size:', len(heap))
    if 'verbose' in options:
        print('Heap:', heap)
        print('Peek:', heap.peek())
    if 'selftest' in options:
        selftest()
    if 'bench' in options:
        benchmark()
    return 0


if __name__ == '__main__':
    sys.exit(main())
