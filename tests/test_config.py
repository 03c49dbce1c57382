from rpc_openapi.config import DOCS_URL, MARKDOWN_URL, BuildConfig


class TestBuildConfig:
    def test_defaults(self):
        config = BuildConfig()
        assert config.markdown_url == MARKDOWN_URL
        assert config.docs_url == DOCS_URL
        assert config.section_heading == "RPC commands"
        assert config.timeout is None

    def test_endpoint_docs_url(self):
        config = BuildConfig(docs_url="https://docs.ipfs.tech/reference/kubo/rpc/")
        assert config.endpoint_docs_url("/api/v0/add") == "https://docs.ipfs.tech/reference/kubo/rpc/#api-v0-add"
        assert config.endpoint_docs_url("/api/v0/swarm/peering/ls") == (
            "https://docs.ipfs.tech/reference/kubo/rpc/#api-v0-swarm-peering-ls"
        )
