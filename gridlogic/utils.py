# utils.py
"""Small iteration helpers shared by the constrainers."""


class combinations:
    """
    Lazy k-element subsets of a sequence, in lexicographic index order.

    Iterating the same object twice starts over, so it can be reused.

    :param choices: the items to choose from
    :param length: the subset size
    """

    def __init__(self, choices, length):
        self.choices = list(choices)
        self.length = length

    def __iter__(self):
        n, k = len(self.choices), self.length
        if k < 0 or k > n:
            return
        idx = list(range(k))
        while True:
            yield [self.choices[i] for i in idx]
            # rightmost index that can still move forward
            i = k - 1
            while i >= 0 and idx[i] == n - k + i:
                i -= 1
            if i < 0:
                return
            idx[i] += 1
            for j in range(i + 1, k):
                idx[j] = idx[j - 1] + 1

    def __len__(self):
        n, k = len(self.choices), self.length
        if k < 0 or k > n:
            return 0
        total = 1
        for i in range(k):
            total = total * (n - i) // (i + 1)
        return total


def zip_columns(columns):
    """Joins multi-line cell strings side by side, truncating to the shortest."""
    split = [c.split("\n") for c in columns]
    return "\n".join("".join(row) for row in zip(*split))
