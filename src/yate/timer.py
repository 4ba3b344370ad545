""" One-shot timers for the connection's dispatcher loop. Nothing here runs
    in the background: the loop asks :func:`Timers.timeout` how long it may
    sleep, and calls :func:`Timers.expire` when it wakes up. Every timer
    callback therefore runs on the loop's thread, serialized with everything
    else the connection does.
"""

import heapq
import itertools
import math
import time


class Timer:
    """ A handle for a scheduled call. The only thing a caller can do with
        it is :func:`cancel` the call before it happens.
    """

    def __init__(self, deadline, method, args):

        self.deadline = deadline
        self.method = method
        self.args = args
        self.cancelled = False
        self.fired = False


    def cancel(self):
        self.cancelled = True


    @property
    def active(self):
        return self.cancelled == False and self.fired == False


# end of class Timer



class Timers:
    """ A heap of pending :class:`Timer` instances ordered by deadline. The
        *clock* returns the current time in seconds; it defaults to
        :func:`time.monotonic`, and exists as an argument so that a caller
        can drive time by hand.
    """

    def __init__(self, clock=None):

        if clock is None:
            clock = time.monotonic

        self.clock = clock
        self.heap = list()
        self.ticker = itertools.count()


    def __len__(self):
        self._prune()
        return len(self.heap)


    def schedule(self, delay, method, *args):
        """ Invoke *method* with *args* after *delay* seconds. Returns the
            :class:`Timer` handle.
        """

        delay = max(float(delay), 0.0)
        deadline = self.clock() + delay

        timer = Timer(deadline, method, args)

        # The ticker breaks ties between equal deadlines, keeping the
        # order in which timers were scheduled.

        heapq.heappush(self.heap, (deadline, next(self.ticker), timer))
        return timer


    def _prune(self):

        heap = self.heap
        while heap and heap[0][2].cancelled:
            heapq.heappop(heap)


    def timeout(self):
        """ Return the number of milliseconds until the next timer is due,
            or None if no timers are pending.
        """

        self._prune()

        if len(self.heap) == 0:
            return None

        remaining = self.heap[0][0] - self.clock()
        if remaining <= 0:
            return 0

        return int(math.ceil(remaining * 1000))


    def expire(self):
        """ Fire every timer whose deadline has passed. Timers scheduled by
            a firing timer are eligible immediately if they are already due.
            Returns the number of timers fired.
        """

        fired = 0
        heap = self.heap

        while heap:
            now = self.clock()
            deadline, _tick, timer = heap[0]

            if timer.cancelled:
                heapq.heappop(heap)
                continue

            if deadline > now:
                break

            heapq.heappop(heap)
            timer.fired = True
            fired += 1
            timer.method(*timer.args)

        return fired


    def clear(self):

        for deadline, tick, timer in self.heap:
            timer.cancel()

        self.heap = list()


# end of class Timers


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
