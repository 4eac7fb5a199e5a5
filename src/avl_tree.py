from typing import Dict, List, Optional


class DuplicateKeyError(ValueError):
    def __init__(self, key: int) -> None:
        super().__init__(f"key {key} already in tree")
        self.key: int = key


class InvariantViolation(AssertionError):
    """Base class for structural defects reported by AVLTree.verify()."""

    def __init__(self, message: str, key: Optional[int] = None) -> None:
        super().__init__(message)
        self.key: Optional[int] = key


class OrderViolation(InvariantViolation):
    pass


class BalanceFactorMismatch(InvariantViolation):
    pass


class BalanceOutOfRange(InvariantViolation):
    pass


class ParentLinkViolation(InvariantViolation):
    pass


class AVLTree:
    """Set of unique integer keys kept height-balanced.

    Every node stores its balance factor, height(left) - height(right),
    which insertion updates on the way back up from the new leaf instead
    of recomputing subtree heights. A factor of +2 or -2 is fixed by one
    of four rotations at that node, after which the walk stops.
    """

    class Node:
        def __init__(self, key: int, parent: Optional['AVLTree.Node'] = None) -> None:
            self.key: int = key
            self.bf: int = 0
            self.left: Optional['AVLTree.Node'] = None
            self.right: Optional['AVLTree.Node'] = None
            self.parent: Optional['AVLTree.Node'] = parent

        def __repr__(self) -> str:
            return f"Node(key={self.key}, bf={self.bf})"

    FIXUP_CASES = ("LL", "LR", "RR", "RL")

    def __init__(self) -> None:
        self._root: Optional[AVLTree.Node] = None
        self._size: int = 0
        self._fixups: Dict[str, int] = dict.fromkeys(AVLTree.FIXUP_CASES, 0)

    @property
    def root(self) -> Optional['AVLTree.Node']:
        return self._root

    def insert(self, key: int) -> None:
        """Insert key, raising DuplicateKeyError if it is already present.

        A rejected key leaves the tree untouched.
        """
        if not self._insert(key):
            raise DuplicateKeyError(key)

    def add(self, key: int) -> bool:
        """Insert key and report whether it was new, without raising."""
        return self._insert(key)

    def _insert(self, key: int) -> bool:
        if self._root is None:
            self._root = AVLTree.Node(key)
            self._size += 1
            return True

        parent = self._root
        node: Optional[AVLTree.Node] = self._root
        while node is not None:
            if key == node.key:
                return False
            parent = node
            node = node.left if key < node.key else node.right

        child = AVLTree.Node(key, parent)
        if key < parent.key:
            parent.left = child
        else:
            parent.right = child
        self._size += 1

        self._retrace(parent, child)
        return True

    def _retrace(self, parent: Node, cur: Node) -> None:
        while True:
            if cur is parent.left:
                parent.bf += 1
            else:
                parent.bf -= 1

            if parent.bf == 0:
                return
            if parent.bf == 2:
                if cur.bf == 1:
                    self._fix_left_left(parent)
                else:
                    self._fix_left_right(parent)
                return
            if parent.bf == -2:
                if cur.bf == -1:
                    self._fix_right_right(parent)
                else:
                    self._fix_right_left(parent)
                return
            if parent.parent is None:
                return

            cur, parent = parent, parent.parent

    def _rotate_left(self, node: Node) -> None:
        grandparent = node.parent
        right = node.right
        assert right is not None
        inner = right.left

        right.parent = grandparent
        if grandparent is None:
            self._root = right
        elif node is grandparent.left:
            grandparent.left = right
        else:
            grandparent.right = right

        right.left = node
        node.parent = right

        node.right = inner
        if inner is not None:
            inner.parent = node

    def _rotate_right(self, node: Node) -> None:
        grandparent = node.parent
        left = node.left
        assert left is not None
        inner = left.right

        left.parent = grandparent
        if grandparent is None:
            self._root = left
        elif node is grandparent.left:
            grandparent.left = left
        else:
            grandparent.right = left

        left.right = node
        node.parent = left

        node.left = inner
        if inner is not None:
            inner.parent = node

    def _fix_left_left(self, node: Node) -> None:
        left = node.left
        assert left is not None
        self._rotate_right(node)
        node.bf = left.bf = 0
        self._fixups["LL"] += 1

    def _fix_right_right(self, node: Node) -> None:
        right = node.right
        assert right is not None
        self._rotate_left(node)
        node.bf = right.bf = 0
        self._fixups["RR"] += 1

    def _fix_left_right(self, node: Node) -> None:
        left = node.left
        assert left is not None
        pivot = left.right
        assert pivot is not None

        self._rotate_left(left)
        self._rotate_right(node)

        # pivot's heavier side decides which of its new children ends up short
        if pivot.bf == 1:
            node.bf, left.bf = -1, 0
        elif pivot.bf == -1:
            node.bf, left.bf = 0, 1
        else:
            node.bf = left.bf = 0
        pivot.bf = 0
        self._fixups["LR"] += 1

    def _fix_right_left(self, node: Node) -> None:
        right = node.right
        assert right is not None
        pivot = right.left
        assert pivot is not None

        self._rotate_right(right)
        self._rotate_left(node)

        if pivot.bf == -1:
            node.bf, right.bf = 1, 0
        elif pivot.bf == 1:
            node.bf, right.bf = 0, -1
        else:
            node.bf = right.bf = 0
        pivot.bf = 0
        self._fixups["RL"] += 1

    def contains(self, key: int) -> bool:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return True
        return False

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def height(self) -> int:
        if self._root is None:
            return 0
        return self._subtree_heights()[id(self._root)]

    def fixup_counts(self) -> Dict[str, int]:
        return dict(self._fixups)

    def _in_order_keys(self) -> List[int]:
        result: List[int] = []
        stack: List[AVLTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.key)
            node = node.right
        return result

    def _pre_order_nodes(self) -> List['AVLTree.Node']:
        result: List[AVLTree.Node] = []
        if self._root is None:
            return result
        stack: List[AVLTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def _post_order_nodes(self) -> List['AVLTree.Node']:
        result: List[AVLTree.Node] = []
        if self._root is None:
            return result
        stack: List[AVLTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        result.reverse()
        return result

    def _subtree_heights(self) -> Dict[int, int]:
        """Map id(node) to the height of the subtree rooted at node.

        Computed from the links alone, never from stored balance factors.
        """
        heights: Dict[int, int] = {}
        for node in self._post_order_nodes():
            left = heights[id(node.left)] if node.left is not None else 0
            right = heights[id(node.right)] if node.right is not None else 0
            heights[id(node)] = 1 + max(left, right)
        return heights

    def verify(self) -> None:
        """Check every structural invariant, raising on the first failure.

        Diagnostic only: each check is a separate full traversal.
        """
        self._verify_order()
        self._verify_balance_factors()
        self._verify_balance_range()
        self._verify_parent_links()

    def _verify_order(self) -> None:
        keys = self._in_order_keys()
        for actual, expected in zip(keys, sorted(keys)):
            if actual != expected:
                raise OrderViolation(f"in-order traversal unsorted at key {actual}", actual)

    def _verify_balance_factors(self) -> None:
        heights = self._subtree_heights()
        for node in self._pre_order_nodes():
            left = heights[id(node.left)] if node.left is not None else 0
            right = heights[id(node.right)] if node.right is not None else 0
            if node.bf != left - right:
                raise BalanceFactorMismatch(
                    f"node {node.key} stores bf {node.bf}, actual {left - right}", node.key
                )

    def _verify_balance_range(self) -> None:
        for node in self._pre_order_nodes():
            if node.bf not in (-1, 0, 1):
                raise BalanceOutOfRange(f"node {node.key} has bf {node.bf}", node.key)

    def _verify_parent_links(self) -> None:
        if self._root is not None and self._root.parent is not None:
            raise ParentLinkViolation(f"root {self._root.key} has a parent", self._root.key)
        for node in self._pre_order_nodes():
            for child in (node.left, node.right):
                if child is not None and child.parent is not node:
                    raise ParentLinkViolation(
                        f"node {child.key} does not link back to parent {node.key}", child.key
                    )

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: int) -> bool:
        return self.contains(key)

    def __repr__(self) -> str:
        return f"AVLTree(size={self._size}, height={self.height()})"
