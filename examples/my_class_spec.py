"""Behaviour of MyClass, and a tour of scopespec.

Run with ``scopespec examples`` or ``pytest examples``.

1. A ``Specification`` collects example groups in the order they are written.
2. ``spec.should(label)`` opens a group; ``group.example(label)`` adds an
   example to it.
3. An example is a label plus a check. The check passes when it returns
   ``None``, ``True``, ``success`` or a matching ``MatchResult``; it can also
   return ``pending(...)``/``failure(...)`` or raise through ``must``.
"""

from my_class import MyClass

from scopespec import (
    After,
    Scope,
    Specification,
    be_between,
    be_empty,
    be_equal_to,
    be_ge,
    be_greater_than,
    be_none,
    be_some,
    be_true,
    contain,
    end_with,
    equal_to,
    have_key,
    have_length,
    have_pair,
    have_size,
    must,
    must_equal,
    must_not_equal,
    not_,
    pending,
    success,
    throw_an,
    typed_equal_to,
)

spec = Specification("MyClass")

with spec.should("My awesome class") as group:
    group.example("do something", lambda: success)

    @group.example("do something else")
    def _():
        pending("not written yet")

    @group.example("be awesome")
    def _():
        my_class = MyClass()
        return must(my_class.is_awesome, be_true())


# Each example that names a context gets a brand new instance of it, so an
# example can mutate its fields without affecting any other example. Contexts
# can extend one another to describe more specific situations.


class Context(Scope):
    def setup(self) -> None:
        self.my_class = MyClass()


class ContextWithHelloMessage(Context):
    def setup(self) -> None:
        super().setup()
        self.hello_message = self.my_class.hello


with spec.should("Test with variable isolation and setup code") as group:

    @group.example("create a new Context (Scope) for each example", context=Context)
    def _(ctx):
        must_equal(ctx.my_class.prime, 11)

    @group.example("create a new ContextWithHelloMessage for this example", context=ContextWithHelloMessage)
    def _(ctx):
        must_equal(ctx.hello_message, "Hello world")


# ``After`` runs its cleanup hook after every example using it, whether the
# example passed or failed.

USERS: dict[int, str] = {}


class ContextWithCleanup(After):
    user_id = 42
    user_email = "foo@bar.com"

    def setup(self) -> None:
        USERS[self.user_id] = self.user_email

    def after(self) -> None:
        USERS.pop(self.user_id, None)


with spec.should("Test with cleanup code") as group:

    @group.example("see the user while the example runs", context=ContextWithCleanup)
    def _(ctx):
        must(USERS, have_pair((ctx.user_id, "foo@bar.com")))

    @group.example("start without leftovers from the previous example")
    def _():
        must(USERS, be_empty())


class RichContext(Scope):
    count = 1
    address = "40 Hanamal St., Tel Aviv, Israel"
    name = "John"
    employees: list[str] = []
    months = {1: "January", 2: "February", 3: "March", 4: "April"}

    def explode(self) -> None:
        raise Exception("Kaboom!")


@spec.example("Matchers example", context=RichContext)
def _(ctx):
    # equality
    must_equal(ctx.count, 1)
    must(ctx.count, be_equal_to(1))
    must(ctx.count, equal_to(1))

    # equality with type-safety
    x: int = 1
    must(ctx.count, typed_equal_to(x))

    # negation
    must_not_equal(ctx.count, 2)
    must(ctx.count, not_(equal_to(2)))

    # string
    must(ctx.address, end_with("Israel"))
    must(ctx.address, contain("Tel Aviv"))
    must(ctx.address, have_length(32))
    must(ctx.address, be_equal_to("40 hanamal st., tel aviv, ISRAEL").ignore_case())

    # numeric
    must(len(ctx.address), be_ge(20))
    must(len(ctx.address), be_greater_than(10))
    must(len(ctx.address), be_between(0, 100))

    # optional
    must(ctx.name, be_some("John"))
    must(ctx.name, not_(be_none()))

    # collections
    must(ctx.employees, be_empty())
    must(ctx.employees, not_(contain("Jane")))

    # maps and collections
    must(ctx.months, have_pair((1, "January")))
    must(ctx.months, not_(have_key(12)))
    must(ctx.months.keys(), have_size(4))
    must(ctx.months.values(), contain("March"))

    # exceptions
    must(ctx.explode, throw_an(Exception))
