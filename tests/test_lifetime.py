import unittest

from autobind import Container


class TestInstanceCaching(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.cont = Container()

    def test_resolve_returns_same_instance(self):
        class A: ...

        a1 = self.cont.resolve(A)
        a2 = self.cont.resolve(A)
        assert a2 is a1, "default resolution should return the cached instance"

    def test_resolve_ignores_args_once_cached(self):
        class Counter:
            def __init__(self, start: int = 0):
                self.start = start

        first = self.cont.resolve(Counter, [5])
        again = self.cont.resolve(Counter, [9])
        assert again is first
        assert again.start == 5

    def test_force_new_returns_new_instances(self):
        class A: ...

        a1 = self.cont.resolve(A, force_new=True)
        a2 = self.cont.resolve(A, force_new=True)
        assert a2 is not a1, "forced resolution should construct every time"

    def test_force_new_does_not_read_cache(self):
        class A: ...

        cached = self.cont.resolve(A)
        forced = self.cont.resolve(A, force_new=True)
        assert forced is not cached

    def test_force_new_does_not_populate_cache(self):
        class A: ...

        forced = self.cont.resolve(A, force_new=True)
        assert not self.cont.bound(A)
        assert self.cont.resolve(A) is not forced

    def test_force_new_uses_cached_dependencies(self):
        class Engine: ...

        class Car:
            def __init__(self, engine: Engine):
                self.engine = engine

        engine = self.cont.resolve(Engine)
        car1 = self.cont.resolve(Car, force_new=True)
        car2 = self.cont.resolve(Car, force_new=True)
        assert car1 is not car2
        assert car1.engine is engine
        assert car2.engine is engine

    def test_registered_instance_is_returned(self):
        class A: ...

        inst = A()
        self.cont.instance(A, inst)
        assert self.cont.resolve(A) is inst
        assert self.cont.resolve(A, force_new=True) is not inst

    def test_registered_instance_under_string_identifier(self):
        self.cont.instance("settings", {"debug": True})
        assert self.cont.resolve("settings") == {"debug": True}

    def test_forget_drops_cached_instance(self):
        class A: ...

        a1 = self.cont.resolve(A)
        self.cont.forget(A)
        a2 = self.cont.resolve(A)
        assert a2 is not a1
        assert self.cont.resolve(A) is a2

    def test_separate_containers_do_not_share_instances(self):
        class A: ...

        other = Container()
        assert self.cont.resolve(A) is not other.resolve(A)

    def test_cached_instance_is_returned_without_looking_at_args(self):
        class A: ...

        cached = self.cont.resolve(A)
        assert self.cont.resolve(A, "not-an-argument-list") is cached
        assert self.cont.resolve(A, 42) is cached
