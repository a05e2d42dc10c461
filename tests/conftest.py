"""Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup
- Sample DCP documents (asset map, CPL, PKL) taken from a FreeDCP package
- Builders for asset map XML and DCP directories on disk
"""

import os
from pathlib import Path
from typing import Callable, Generator

import pytest

# Set application environment variables BEFORE importing any application code
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["DCP_HEADER_SNIFF_BYTES"] = "100"


INTEROP_AM_NS = "http://www.digicine.com/PROTO-ASDCP-AM-20040311#"

MXF_HEADER_KEY = bytes([
    0x06, 0x0E, 0x2B, 0x34, 0x02, 0x05, 0x01, 0x01,
    0x0D, 0x01, 0x02, 0x01, 0x01, 0x02, 0x04, 0x00,
    0x83, 0x00, 0x00, 0x78, 0x00, 0x01, 0x00, 0x02,
    0x00, 0x00, 0x00, 0x01,
])

PKL_ID = "urn:uuid:4d9e98c3-c923-4910-ae0e-9f5951c9cc5f"
CPL_ID = "urn:uuid:d65572db-2e09-4745-817d-a2881222e2db"
VIDEO_ID = "urn:uuid:db95199c-0e2f-4ac4-9e54-b97919dcdf07"
AUDIO_ID = "urn:uuid:5fbb3067-4166-4a19-9ba2-0a2b4c5cd397"

PKL_FILE = "4d9e98c3-c923-4910-ae0e-9f5951c9cc5f_pkl.xml"
CPL_FILE = "d65572db-2e09-4745-817d-a2881222e2db_cpl.xml"
VIDEO_FILE = "bewegte_bilder-tricks17-test_film-full_content-51-j2k_video.mxf"
AUDIO_FILE = "bewegte_bilder-tricks17-test_film-full_content-51-j2k_audio.mxf"


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Reload settings from the environment for every test."""
    from src.shared.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Sample Document Fixtures
# =============================================================================


@pytest.fixture
def sample_asset_map_xml() -> bytes:
    """Interop asset map with one PKL, one CPL and two MXF assets."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<AssetMap xmlns="http://www.digicine.com/PROTO-ASDCP-AM-20040311#">
  <Id>urn:uuid:88ef5d99-e2aa-483e-9697-943e18b77cea</Id>
  <Creator>OpenDCP 0.0.26</Creator>
  <VolumeCount>1</VolumeCount>
  <IssueDate>2012-09-28T03:40:08+00:00</IssueDate>
  <Issuer>FreeDCP.net</Issuer>
  <AssetList>
    <Asset>
      <Id>urn:uuid:4d9e98c3-c923-4910-ae0e-9f5951c9cc5f</Id>
      <PackingList>true</PackingList>
      <ChunkList>
        <Chunk>
          <Path>4d9e98c3-c923-4910-ae0e-9f5951c9cc5f_pkl.xml</Path>
          <VolumeIndex>1</VolumeIndex>
          <Offset>0</Offset>
          <Length>1288</Length>
        </Chunk>
      </ChunkList>
    </Asset>
    <Asset>
      <Id>urn:uuid:d65572db-2e09-4745-817d-a2881222e2db</Id>
      <ChunkList>
        <Chunk>
          <Path>d65572db-2e09-4745-817d-a2881222e2db_cpl.xml</Path>
          <VolumeIndex>1</VolumeIndex>
          <Offset>0</Offset>
          <Length>1550</Length>
        </Chunk>
      </ChunkList>
    </Asset>
    <Asset>
      <Id>urn:uuid:db95199c-0e2f-4ac4-9e54-b97919dcdf07</Id>
      <ChunkList>
        <Chunk>
          <Path>bewegte_bilder-tricks17-test_film-full_content-51-j2k_video.mxf</Path>
          <VolumeIndex>1</VolumeIndex>
          <Offset>0</Offset>
          <Length>3906847916</Length>
        </Chunk>
      </ChunkList>
    </Asset>
    <Asset>
      <Id>urn:uuid:5fbb3067-4166-4a19-9ba2-0a2b4c5cd397</Id>
      <ChunkList>
        <Chunk>
          <Path>bewegte_bilder-tricks17-test_film-full_content-51-j2k_audio.mxf</Path>
          <VolumeIndex>1</VolumeIndex>
          <Offset>0</Offset>
          <Length>879052345</Length>
      </Chunk>
      </ChunkList>
    </Asset>
  </AssetList>
</AssetMap>"""


@pytest.fixture
def sample_cpl_xml() -> bytes:
    """Interop CPL with one reel holding a picture and a sound asset."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<CompositionPlaylist xmlns="http://www.digicine.com/PROTO-ASDCP-CPL-20040511#">
  <Id>urn:uuid:d65572db-2e09-4745-817d-a2881222e2db</Id>
  <AnnotationText>Bewegte Bilder - Tricks17 - Test Film - Full Content - 5.1 - JPEG2000</AnnotationText>
  <IssueDate>2012-09-28T03:40:08+00:00</IssueDate>
  <Creator>OpenDCP 0.0.26</Creator>
  <ContentTitleText>Bewegte Bilder - Tricks17 - Test Film - Full Content - 5.1 - JPEG2000</ContentTitleText>
  <ContentKind>test</ContentKind>
  <RatingList/>
  <ReelList>
    <Reel>
      <Id>urn:uuid:da41abd1-a7df-4383-a79f-438dde1d4fd3</Id>
      <AssetList>
        <MainPicture>
          <Id>urn:uuid:db95199c-0e2f-4ac4-9e54-b97919dcdf07</Id>
          <AnnotationText>bewegte_bilder-tricks17-test_film-full_content-51-j2k_video.mxf</AnnotationText>
          <EditRate>24 1</EditRate>
          <IntrinsicDuration>23400</IntrinsicDuration>
          <EntryPoint>0</EntryPoint>
          <Duration>23400</Duration>
          <FrameRate>24 1</FrameRate>
          <ScreenAspectRatio>1.90</ScreenAspectRatio>
        </MainPicture>
        <MainSound>
          <Id>urn:uuid:5fbb3067-4166-4a19-9ba2-0a2b4c5cd397</Id>
          <AnnotationText>bewegte_bilder-tricks17-test_film-full_content-51-j2k_audio.mxf</AnnotationText>
          <EditRate>24 1</EditRate>
          <IntrinsicDuration>24404</IntrinsicDuration>
          <EntryPoint>0</EntryPoint>
          <Duration>23400</Duration>
        </MainSound>
      </AssetList>
    </Reel>
  </ReelList>
</CompositionPlaylist>"""


@pytest.fixture
def sample_pkl_xml() -> bytes:
    """Interop PKL listing the picture, sound and CPL assets."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<PackingList xmlns="http://www.digicine.com/PROTO-ASDCP-PKL-20040311#">
  <Id>urn:uuid:4d9e98c3-c923-4910-ae0e-9f5951c9cc5f</Id>
  <AnnotationText>Bewegte Bilder - Tricks17 - Test Film - Full Content - 5.1 - JPEG2000</AnnotationText>
  <IssueDate>2012-09-28T03:40:08+00:00</IssueDate>
  <Issuer>FreeDCP.net</Issuer>
  <Creator>OpenDCP 0.0.26</Creator>
  <AssetList>
    <Asset>
      <Id>urn:uuid:db95199c-0e2f-4ac4-9e54-b97919dcdf07</Id>
      <AnnotationText>bewegte_bilder-tricks17-test_film-full_content-51-j2k_video.mxf</AnnotationText>
      <Hash>R53oZs3TlqpWkRa1AhcduI8glak=</Hash>
      <Size>3906847916</Size>
      <Type>application/x-smpte-mxf;asdcpKind=Picture</Type>
    </Asset>
    <Asset>
      <Id>urn:uuid:5fbb3067-4166-4a19-9ba2-0a2b4c5cd397</Id>
      <AnnotationText>bewegte_bilder-tricks17-test_film-full_content-51-j2k_audio.mxf</AnnotationText>
      <Hash>6M60C7/OjyhH+tjBlaHrPreXWIU=</Hash>
      <Size>879052345</Size>
      <Type>application/x-smpte-mxf;asdcpKind=Sound</Type>
    </Asset>
    <Asset>
      <Id>urn:uuid:d65572db-2e09-4745-817d-a2881222e2db</Id>
      <Hash>IWCQsMJUrIEighw/7ViCPeP7nw4=</Hash>
      <Size>1550</Size>
      <Type>text/xml;asdcpKind=CPL</Type>
    </Asset>
  </AssetList>
</PackingList>"""


@pytest.fixture
def malformed_xml() -> bytes:
    """Malformed XML (syntax error)."""
    return b"""<?xml version="1.0" encoding="UTF-8"?>
<AssetMap>
    <Id>broken
    <!-- Missing closing tags -->
"""


@pytest.fixture
def mxf_header() -> bytes:
    """Leading bytes of an MXF essence file."""
    return MXF_HEADER_KEY


# =============================================================================
# DCP Builders
# =============================================================================


def build_asset_map_xml(
    assets: list[dict],
    namespace: str = INTEROP_AM_NS,
    asset_map_id: str = "urn:uuid:88ef5d99-e2aa-483e-9697-943e18b77cea",
) -> bytes:
    """Render an asset map.

    Each asset is a dict with 'id', 'chunks' (list of (path, length)
    tuples) and an optional 'packing_list' flag.
    """
    asset_xml = []
    for asset in assets:
        packing_list = ""
        if asset.get("packing_list"):
            packing_list = "<PackingList>true</PackingList>"
        chunks = "".join(
            f"<Chunk><Path>{path}</Path><VolumeIndex>1</VolumeIndex>"
            f"<Offset>0</Offset><Length>{length}</Length></Chunk>"
            for path, length in asset["chunks"]
        )
        asset_xml.append(
            f"<Asset><Id>{asset['id']}</Id>{packing_list}"
            f"<ChunkList>{chunks}</ChunkList></Asset>"
        )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<AssetMap xmlns="{namespace}">'
        f"<Id>{asset_map_id}</Id>"
        "<Creator>OpenDCP 0.0.26</Creator>"
        "<VolumeCount>1</VolumeCount>"
        "<IssueDate>2012-09-28T03:40:08+00:00</IssueDate>"
        "<Issuer>FreeDCP.net</Issuer>"
        f"<AssetList>{''.join(asset_xml)}</AssetList>"
        "</AssetMap>"
    ).encode("utf-8")


@pytest.fixture
def write_dcp(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a DCP directory whose asset map matches its files.

    Takes a list of (asset_id, filename, content, packing_list) tuples.
    Every asset gets one chunk whose declared length is the content's length.
    """

    def _write(
        files: list[tuple[str, str, bytes, bool]],
        asset_map_name: str = "ASSETMAP",
        namespace: str = INTEROP_AM_NS,
    ) -> Path:
        assets = []
        for asset_id, filename, content, packing_list in files:
            (tmp_path / filename).write_bytes(content)
            assets.append({
                "id": asset_id,
                "chunks": [(filename, len(content))],
                "packing_list": packing_list,
            })
        (tmp_path / asset_map_name).write_bytes(build_asset_map_xml(assets, namespace))
        return tmp_path

    return _write


@pytest.fixture
def dcp_dir(
    write_dcp: Callable[..., Path],
    sample_pkl_xml: bytes,
    sample_cpl_xml: bytes,
    mxf_header: bytes,
) -> Path:
    """Complete Interop DCP on disk with stand-in MXF essence files."""
    return write_dcp([
        (PKL_ID, PKL_FILE, sample_pkl_xml, True),
        (CPL_ID, CPL_FILE, sample_cpl_xml, False),
        (VIDEO_ID, VIDEO_FILE, mxf_header + b"\x00" * 200, False),
        (AUDIO_ID, AUDIO_FILE, mxf_header + b"\xff" * 64, False),
    ])


@pytest.fixture
def asset_map_builder() -> Callable[..., bytes]:
    """Asset map XML renderer (see build_asset_map_xml)."""
    return build_asset_map_xml
