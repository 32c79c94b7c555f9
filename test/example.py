# Declarations below are only recorded by bdd-inventory; no body runs.

it("test-0", lambda: print("won't execute"))


def suite_1():
    it("test-1", lambda: print("won't execute"))


describe("suite-1", suite_1)


@describe("suite-2")
def suite_2():
    @describe("suite-2.1")
    def suite_2_1():
        @it("test-2.1.1")
        def test_2_1_1():
            print("won't execute")


@describe("suite-3")
def suite_3():
    before(lambda: print("won't execute"))
    after(lambda: print("won't execute"))

    beforeEach(lambda: print("won't execute"))
    afterEach(lambda: print("won't execute"))

    it("test-3.1", lambda: print("won't execute"))


# suite options are accepted and ignored
@describe("suite-4")
def suite_4(suite):
    suite.timeout(3000)
    suite.slow(150)
    suite.retries(4)

    @describe("suite-4.1")
    def suite_4_1(suite):
        suite.timeout(3000)
        suite.slow(150)
        suite.retries(4)

        @it("test-4.1.1")
        def test_4_1_1(test):
            test.skip()
            print("won't execute")


@describe("suite-5")
async def suite_5():
    it.skip("test-5.1", lambda: print("won't execute"))

    @describe.skip("suite-5.2")
    def suite_5_2():
        it("test-5.2.1", lambda: print("won't execute"))
